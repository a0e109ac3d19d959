#!/usr/bin/env python3
"""
Test suite for the request/response codec
"""
import unittest

from greetwire.core.codec import (
    encode_request, decode_request, encode_response, decode_response, parse_headers
)
from greetwire.core.message import Request, Response, build_response


class RequestCodecTests(unittest.TestCase):
    def test_encode_request(self):
        """Request line and headers are emitted in order"""
        request = Request('GET', '/greet/1?name=Ada', 'HTTP/1.1', '127.0.0.1:6636',
                          'application/json', 'gzip')
        self.assertEqual(
            encode_request(request),
            b'GET /greet/1?name=Ada HTTP/1.1\r\n'
            b'Host: 127.0.0.1:6636\r\n'
            b'Accept: application/json\r\n'
            b'Accept-Encoding: gzip\r\n'
            b'\r\n'
        )

    def test_encode_request_omits_none_encoding(self):
        request = Request('GET', '/', 'HTTP/1.1', 'a:1', 'application/xml', 'none')
        raw = encode_request(request)
        self.assertNotIn(b'Accept-Encoding', raw)
        self.assertTrue(raw.endswith(b'Accept: application/xml\r\n\r\n'))

    def test_round_trip(self):
        """Decoding an encoded request reproduces every field"""
        for encoding in ('gzip', 'deflate', 'none'):
            with self.subTest(encoding=encoding):
                request = Request('GET', '/greet/1?name=Ada', 'HTTP/1.1', 'localhost:80',
                                  'application/json', encoding)
                self.assertEqual(decode_request(encode_request(request)), request)

    def test_missing_accept_encoding_defaults_to_none(self):
        request = decode_request(b'GET / HTTP/1.1\r\nHost: a:1\r\nAccept: text/html\r\n\r\n')
        self.assertEqual(request.accept_encoding, 'none')

    def test_header_names_case_insensitive(self):
        request = decode_request(
            b'GET / HTTP/1.1\r\n'
            b'HOST: a:1\r\n'
            b'accept: application/xml\r\n'
            b'ACCEPT-encoding: deflate\r\n'
            b'\r\n'
        )
        self.assertEqual(request.host, 'a:1')
        self.assertEqual(request.accept, 'application/xml')
        self.assertEqual(request.accept_encoding, 'deflate')

    def test_repeated_header_keeps_last(self):
        request = decode_request(
            b'GET / HTTP/1.1\r\n'
            b'Host: a:1\r\n'
            b'Accept: application/json\r\n'
            b'Accept: application/xml\r\n'
            b'\r\n'
        )
        self.assertEqual(request.accept, 'application/xml')

    def test_malformed_request_line(self):
        """Fewer than three tokens leaves the start line fields empty"""
        request = decode_request(b'INVALID\r\nHost: a:1\r\n\r\n')
        self.assertEqual(request.method, '')
        self.assertEqual(request.target, '')
        self.assertEqual(request.version, '')
        self.assertEqual(request.host, 'a:1')

    def test_malformed_and_unknown_headers_skipped(self):
        request = decode_request(
            b'GET / HTTP/1.1\r\n'
            b'no separator here\r\n'
            b'User-Agent: test\r\n'
            b'Accept:missing-space\r\n'
            b'Host: a:1\r\n'
            b'\r\n'
        )
        self.assertEqual(request.host, 'a:1')
        self.assertEqual(request.accept, '')

    def test_empty_input(self):
        self.assertEqual(decode_request(b''), Request())


class ResponseCodecTests(unittest.TestCase):
    def test_encode_response(self):
        response = build_response('200', 'application/json', 'gzip', b'abc')
        self.assertEqual(
            encode_response(response),
            b'HTTP/1.1 200 OK\r\n'
            b'Content-Type: application/json\r\n'
            b'Content-Encoding: gzip\r\n'
            b'Content-Length: 3\r\n'
            b'\r\n'
            b'abc'
        )

    def test_status_text_is_always_ok(self):
        self.assertEqual(encode_response(build_response('404')),
                         b'HTTP/1.1 404 OK\r\nContent-Length: 0\r\n\r\n')

    def test_identity_encoding_omitted(self):
        raw = encode_response(build_response('200', 'text/html', 'none', b'<html></html>'))
        self.assertNotIn(b'Content-Encoding', raw)

    def test_content_length_recomputed(self):
        """A stale content_length field is never written"""
        response = Response('HTTP/1.1', '200', '', '', 999, b'abcd')
        self.assertIn(b'Content-Length: 4\r\n', encode_response(response))

    def test_round_trip_binary_body(self):
        """Bodies containing CRLF sequences survive decoding byte for byte"""
        data = b'\x1f\x8b\r\n\r\n\x00\xff\r\nline\r\n\r\n'
        response = build_response('200', 'application/json', 'gzip', data)
        decoded = decode_response(encode_response(response))
        self.assertEqual(decoded, response)
        self.assertEqual(decoded.data, data)

    def test_malformed_status_line(self):
        decoded = decode_response(b'HTTP/1.1 200\r\nContent-Length: 2\r\n\r\nok')
        self.assertEqual(decoded.version, '')
        self.assertEqual(decoded.status, '')
        self.assertEqual(decoded.content_length, 2)
        self.assertEqual(decoded.data, b'ok')

    def test_invalid_content_length(self):
        decoded = decode_response(b'HTTP/1.1 200 OK\r\nContent-Length: many\r\n\r\n')
        self.assertEqual(decoded.content_length, 0)
        self.assertEqual(decoded.data, b'')

    def test_headers_without_terminator(self):
        decoded = decode_response(b'HTTP/1.1 500 OK\r\nContent-Type: text/plain')
        self.assertEqual(decoded.status, '500')
        self.assertEqual(decoded.content_type, 'text/plain')
        self.assertEqual(decoded.data, b'')


class HeaderParsingTests(unittest.TestCase):
    def test_stops_at_blank_line(self):
        headers = parse_headers(['Host: a', '', 'Accept: b'], ('host', 'accept'))
        self.assertEqual(headers, {'host': 'a'})

    def test_value_may_contain_separator(self):
        headers = parse_headers(['Accept: a: b'], ('accept',))
        self.assertEqual(headers, {'accept': 'a: b'})

    def test_repeated_header_keeps_last(self):
        headers = parse_headers(['Accept: a', 'accept: b'], ('accept',))
        self.assertEqual(headers, {'accept': 'b'})


if __name__ == '__main__':
    unittest.main()
