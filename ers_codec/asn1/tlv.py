"""
Generic tag-length-value elements.

Thin, untyped view over ``asn1crypto.parser``: an element knows its
identifier octets (class, method, tag) and keeps its original header,
contents and trailer so it can be written back byte for byte. Typed
decoding happens one level up, once the caller knows what an element is
supposed to be.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from asn1crypto import core, parser  # type: ignore[import-untyped]

from ers_codec.asn1.errors import MalformedStructureError, TypeMismatchError

CLASS_UNIVERSAL = 0
CLASS_APPLICATION = 1
CLASS_CONTEXT = 2
CLASS_PRIVATE = 3

METHOD_PRIMITIVE = 0
METHOD_CONSTRUCTED = 1

TAG_INTEGER = 2
TAG_SEQUENCE = 16

_CLASS_NAMES = {
    CLASS_UNIVERSAL: "universal",
    CLASS_APPLICATION: "application",
    CLASS_CONTEXT: "context",
    CLASS_PRIVATE: "private",
}

_UNIVERSAL_NAMES = {
    1: "BOOLEAN",
    2: "INTEGER",
    3: "BIT STRING",
    4: "OCTET STRING",
    5: "NULL",
    6: "OBJECT IDENTIFIER",
    10: "ENUMERATED",
    12: "UTF8String",
    16: "SEQUENCE",
    17: "SET",
    19: "PrintableString",
    22: "IA5String",
    23: "UTCTime",
    24: "GeneralizedTime",
}


@dataclass(frozen=True)
class TLVElement:
    """A single parsed TLV element, typed only by its identifier octets."""

    class_: int
    method: int
    tag: int
    header: bytes
    contents: bytes
    trailer: bytes = b""

    @classmethod
    def load(cls, data: bytes, *, strict: bool = True) -> TLVElement:
        """Parse the first element of ``data``.

        With ``strict`` set, any bytes following the element are an error.
        """
        try:
            class_, method, tag, header, contents, trailer = parser.parse(data, strict=strict)
        except ValueError as exc:
            raise MalformedStructureError(f"Invalid TLV encoding: {exc}") from exc
        return cls(class_, method, tag, header, contents, trailer)

    @classmethod
    def build(cls, class_: int, method: int, tag: int, contents: bytes) -> TLVElement:
        """Create an element from its parts, emitting a definite-length header."""
        return cls.load(parser.emit(class_, method, tag, contents))

    @classmethod
    def from_value(cls, value: core.Asn1Value) -> TLVElement:
        """Wrap a typed ``asn1crypto`` value as a generic element."""
        return cls.load(value.dump())

    @property
    def encoded(self) -> bytes:
        return self.header + self.contents + self.trailer

    def dump(self) -> bytes:
        return self.encoded

    @property
    def is_constructed(self) -> bool:
        return self.method == METHOD_CONSTRUCTED

    @property
    def is_context_tagged(self) -> bool:
        return self.class_ == CLASS_CONTEXT

    def is_universal(self, tag: int) -> bool:
        return self.class_ == CLASS_UNIVERSAL and self.tag == tag

    @property
    def type_name(self) -> str:
        """Human readable type used in diagnostics, e.g. ``INTEGER`` or ``[0] (context)``."""
        if self.class_ == CLASS_UNIVERSAL:
            return _UNIVERSAL_NAMES.get(self.tag, f"UNIVERSAL {self.tag}")
        return f"[{self.tag}] ({_CLASS_NAMES.get(self.class_, self.class_)})"

    def retag(self, class_: int, tag: int) -> TLVElement:
        """Return the same contents under a different identifier.

        This is how implicit tagging is applied and removed: the contents
        octets are untouched, only the identifier changes.
        """
        return TLVElement.build(class_, self.method, tag, self.contents)

    def children(self) -> tuple[TLVElement, ...]:
        """Split a constructed element into its direct children."""
        if not self.is_constructed:
            raise TypeMismatchError(
                f"Expected a constructed element, found primitive {self.type_name}",
                actual_type=self.type_name,
            )
        return split_elements(self.contents)


def split_elements(data: bytes) -> tuple[TLVElement, ...]:
    """Split concatenated encodings into a tuple of elements.

    ``parser.parse`` has no offset argument, so this walks the buffer with
    the pointer-based ``parser._parse`` that ``asn1crypto.core`` itself uses,
    keeping the split linear in the input size.
    """
    elements: list[TLVElement] = []
    offset = 0
    end = len(data)
    while offset < end:
        try:
            info, offset = parser._parse(data, end, offset)
        except ValueError as exc:
            raise MalformedStructureError(f"Invalid TLV encoding: {exc}") from exc
        elements.append(TLVElement(*info))
    return tuple(elements)


def load_sequence(data: bytes, *, strict: bool = True) -> tuple[TLVElement, ...]:
    """Parse an outer SEQUENCE and return its elements one level deep."""
    outer = TLVElement.load(data, strict=strict)
    if not outer.is_universal(TAG_SEQUENCE):
        raise TypeMismatchError(
            f"Expected SEQUENCE, found {outer.type_name}",
            actual_type=outer.type_name,
        )
    return outer.children()


def dump_sequence(elements: Iterable[TLVElement]) -> bytes:
    """Encode elements as the contents of a definite-length SEQUENCE."""
    contents = b"".join(element.encoded for element in elements)
    return bytes(parser.emit(CLASS_UNIVERSAL, METHOD_CONSTRUCTED, TAG_SEQUENCE, contents))
