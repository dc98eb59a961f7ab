"""
Decoding errors for Evidence Record Syntax structures.

Every error is permanent: malformed input never becomes valid on retry.
"""

from __future__ import annotations


class EvidenceRecordError(ValueError):
    """Base class for all evidence record decoding failures."""


class MalformedStructureError(EvidenceRecordError):
    """Raised when the element layout does not match the ASN.1 definition."""


class TypeMismatchError(MalformedStructureError):
    """Raised when an element is present but not of the expected type."""

    def __init__(self, message: str, *, actual_type: str) -> None:
        super().__init__(message)
        self.actual_type = actual_type


class UnknownTagError(MalformedStructureError):
    """Raised when an interior element carries an unsupported context tag."""

    def __init__(self, tag: int) -> None:
        super().__init__(f"Unknown tag in evidence record: [{tag}]")
        self.tag = tag


class UnsupportedVersionError(EvidenceRecordError):
    """Raised when the record version is not one this codec understands."""

    def __init__(self, version: int, supported: int) -> None:
        super().__init__(
            f"Incompatible evidence record version {version} (supported: {supported})"
        )
        self.version = version
        self.supported = supported


class NestedDecodeError(EvidenceRecordError):
    """Raised when a sub-structure rejects its own encoding.

    The collaborator's exception is kept as ``__cause__``.
    """

    def __init__(self, component: str, detail: str) -> None:
        super().__init__(f"Invalid {component}: {detail}")
        self.component = component
