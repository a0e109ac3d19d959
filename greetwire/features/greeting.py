"""
Greeting payload and its JSON/XML representations.

This module provides:
- The Student and Greeting records exchanged by client and server
- JSON marshalling via the json module
- XML marshalling via xml.etree.ElementTree
"""

"""
Copyright 2025 Chris Bunting
File: greeting.py | Purpose: Greeting payload marshalling
@author Chris Bunting | @version 1.0.0

CHANGELOG:
2025-09-02 - Chris Bunting: Initial implementation
"""

import json
import xml.etree.ElementTree as ET
from dataclasses import dataclass, asdict

from ..core.negotiator import JSON, XML


class MarshalError(Exception):
    """Raised when a greeting cannot be serialized or parsed"""
    pass


@dataclass(frozen=True)
class Student:
    name: str
    id: str


@dataclass(frozen=True)
class Greeting:
    """The greeting returned by ``/greet/<id>``."""
    student: Student
    greeter: str


def to_json(greeting: Greeting) -> bytes:
    try:
        return json.dumps(asdict(greeting), separators=(",", ":")).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise MarshalError(f"Cannot encode greeting as JSON: {e}") from e


def from_json(data: bytes) -> Greeting:
    try:
        document = json.loads(data)
        student = document["student"]
        return Greeting(
            student=Student(name=str(student["name"]), id=str(student["id"])),
            greeter=str(document["greeter"]),
        )
    except (ValueError, KeyError, TypeError) as e:
        raise MarshalError(f"Invalid JSON greeting: {e}") from e


def _text(element: ET.Element, path: str) -> str:
    found = element.find(path)
    if found is None:
        raise MarshalError(f"Missing element: {path}")
    return found.text or ""


def to_xml(greeting: Greeting) -> bytes:
    try:
        root = ET.Element("greeting")
        student = ET.SubElement(root, "student")
        ET.SubElement(student, "name").text = greeting.student.name
        ET.SubElement(student, "id").text = greeting.student.id
        ET.SubElement(root, "greeter").text = greeting.greeter
        return ET.tostring(root, encoding="utf-8", xml_declaration=False)
    except (TypeError, ValueError) as e:
        raise MarshalError(f"Cannot encode greeting as XML: {e}") from e


def from_xml(data: bytes) -> Greeting:
    try:
        root = ET.fromstring(data)
    except ET.ParseError as e:
        raise MarshalError(f"Invalid XML greeting: {e}") from e
    if root.tag != "greeting":
        raise MarshalError(f"Unexpected root element: {root.tag}")
    return Greeting(
        student=Student(name=_text(root, "student/name"), id=_text(root, "student/id")),
        greeter=_text(root, "greeter"),
    )


def marshal(greeting: Greeting, content_type: str) -> bytes:
    """Serialize a greeting for a negotiated content type."""
    if content_type == XML:
        return to_xml(greeting)
    return to_json(greeting)


def unmarshal(data: bytes, content_type: str) -> Greeting:
    """Parse a greeting body according to its Content-Type header.

    Raises:
        MarshalError: If the body does not parse or the type is not JSON/XML
    """
    if JSON in content_type:
        return from_json(data)
    if XML in content_type:
        return from_xml(data)
    raise MarshalError(f"Unsupported content type: {content_type!r}")
