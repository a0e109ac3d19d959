#!/usr/bin/env python3
"""
Test suite for message framing
"""
import unittest
import asyncio

from greetwire.core.framer import MessageFramer, read_message, declared_content_length
from tests.helpers import ChunkedStreamReader, MockStreamReader

RESPONSE = b'HTTP/1.1 200 OK\r\nContent-Length: 10\r\n\r\n0123456789'


class FramerTests(unittest.TestCase):
    def setUp(self):
        self.loop = asyncio.new_event_loop()
        asyncio.set_event_loop(self.loop)

    def tearDown(self):
        self.loop.close()

    def _read(self, reader, buffer_size):
        return self.loop.run_until_complete(read_message(reader, buffer_size))

    def test_three_chunks_stop_on_short_final_chunk(self):
        """A short third chunk ends the message without a fourth read"""
        chunks = [RESPONSE[0:20], RESPONSE[20:40], RESPONSE[40:]]
        reader = ChunkedStreamReader(chunks + [b'EXTRA'])

        data = self._read(reader, 20)

        self.assertEqual(data, b''.join(chunks))
        self.assertEqual(reader.reads, 3)

    def test_waits_for_declared_body(self):
        """Full-size chunks keep reading until the body is complete"""
        reader = MockStreamReader(RESPONSE)
        data = self._read(reader, 7)
        self.assertEqual(data, RESPONSE)

    def test_zero_length_stops_at_terminator(self):
        """A request with no Content-Length completes at the blank line"""
        request = b'GET / HTTP/1.1\r\nHost: a:1\r\n\r\n'
        reader = ChunkedStreamReader([request, b'NEVER READ'])

        data = self._read(reader, len(request))

        self.assertEqual(data, request)
        self.assertEqual(reader.reads, 1)

    def test_no_terminator_returns_partial(self):
        """A peer that closes before the headers end yields what arrived"""
        reader = ChunkedStreamReader([b'HTTP/1.1 200', b''])
        self.assertEqual(self._read(reader, 12), b'HTTP/1.1 200')
        self.assertEqual(reader.reads, 2)

        reader = ChunkedStreamReader([b'HTTP/1.1'])
        self.assertEqual(self._read(reader, 64), b'HTTP/1.1')
        self.assertEqual(reader.reads, 1)

    def test_body_bytes_equal_to_terminator(self):
        """Terminator bytes inside the body do not confuse framing"""
        body = b'\r\n\r\n\r\n'
        message = b'HTTP/1.1 200 OK\r\nContent-Length: 6\r\n\r\n' + body
        reader = MockStreamReader(message)
        self.assertEqual(self._read(reader, 4), message)

    def test_feed_after_done_is_ignored(self):
        framer = MessageFramer(4)
        self.assertTrue(framer.feed(b'ab'))
        self.assertTrue(framer.feed(b'cdef'))
        self.assertEqual(framer.data, b'ab')

    def test_headers_complete_flag(self):
        framer = MessageFramer(8)
        framer.feed(b'GET / HT')
        self.assertFalse(framer.headers_complete)
        self.assertFalse(framer.done)
        framer.feed(b'TP/1.1\r\n')
        framer.feed(b'\r\n')
        self.assertTrue(framer.headers_complete)
        self.assertTrue(framer.done)

    def test_invalid_buffer_size(self):
        with self.assertRaises(ValueError):
            MessageFramer(0)


class ContentLengthTests(unittest.TestCase):
    def test_case_insensitive(self):
        self.assertEqual(declared_content_length(b'HTTP/1.1 200 OK\r\ncOnTeNt-LeNgTh: 42'), 42)

    def test_first_occurrence_wins(self):
        head = b'HTTP/1.1 200 OK\r\nContent-Length: 3\r\nContent-Length: 9'
        self.assertEqual(declared_content_length(head), 3)

    def test_missing_or_invalid(self):
        self.assertEqual(declared_content_length(b'HTTP/1.1 200 OK\r\nContent-Type: text/html'), 0)
        self.assertEqual(declared_content_length(b'HTTP/1.1 200 OK\r\nContent-Length: ten'), 0)
        self.assertEqual(declared_content_length(b'HTTP/1.1 200 OK\r\nContent-Length: -4'), 0)


if __name__ == '__main__':
    unittest.main()
