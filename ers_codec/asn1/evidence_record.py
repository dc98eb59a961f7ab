"""
RFC 4998 EvidenceRecord decoding and encoding.

::

    EvidenceRecord ::= SEQUENCE {
      version                   INTEGER { v1(1) } ,
      digestAlgorithms          SEQUENCE OF AlgorithmIdentifier,
      cryptoInfos               [0] CryptoInfos OPTIONAL,
      encryptionInfo            [1] EncryptionInfo OPTIONAL,
      archiveTimeStampSequence  ArchiveTimeStampSequence
    }

Decoding works on the generic element list of the outer SEQUENCE: the
first two and the last element are positional, everything in between is
identified by its implicit context tag. Encoding always writes the
optional elements in tag order.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from asn1crypto import algos, core  # type: ignore[import-untyped]

from ers_codec.asn1.errors import (
    EvidenceRecordError,
    MalformedStructureError,
    NestedDecodeError,
    TypeMismatchError,
    UnknownTagError,
    UnsupportedVersionError,
)
from ers_codec.asn1.structures import (
    ArchiveTimeStampSequence,
    CryptoInfos,
    DigestAlgorithms,
    EncryptionInfo,
)
from ers_codec.asn1.tlv import (
    CLASS_CONTEXT,
    CLASS_UNIVERSAL,
    TAG_INTEGER,
    TAG_SEQUENCE,
    TLVElement,
    dump_sequence,
    load_sequence,
)
from ers_codec.core.config import get_settings
from ers_codec.core.logging import get_logger

logger = get_logger(__name__)

# id-mod-ers88-v1 {iso(1) identified-organization(3) dod(6) internet(1)
# security(5) mechanisms(5) ltans(11) id-mod(0) id-mod-ers88(2) 1}
EVIDENCE_RECORD_OID = "1.3.6.1.5.5.11.0.2.1"
EVIDENCE_RECORD_V1 = 1

MIN_ELEMENTS = 3
MAX_ELEMENTS = 5


class OptionalField(IntEnum):
    """Context tags of the optional EvidenceRecord elements."""

    CRYPTO_INFOS = 0
    ENCRYPTION_INFO = 1


_OPTIONAL_FIELD_SPECS: dict[OptionalField, tuple[str, type[core.Asn1Value]]] = {
    OptionalField.CRYPTO_INFOS: ("cryptoInfos", CryptoInfos),
    OptionalField.ENCRYPTION_INFO: ("encryptionInfo", EncryptionInfo),
}


@dataclass(frozen=True, eq=False)
class EvidenceRecord:
    """A decoded evidence record.

    Two records are equal when their canonical encodings are equal.
    ``version`` is always 1 and cannot be passed in.
    """

    digest_algorithms: tuple[algos.DigestAlgorithm, ...]
    archive_time_stamp_sequence: ArchiveTimeStampSequence
    crypto_infos: CryptoInfos | None = None
    encryption_info: EncryptionInfo | None = None
    version: int = field(default=EVIDENCE_RECORD_V1, init=False)

    def __post_init__(self) -> None:
        algorithms = tuple(self.digest_algorithms)
        for algorithm in algorithms:
            if not isinstance(algorithm, algos.DigestAlgorithm):
                actual = type(algorithm).__name__
                raise TypeMismatchError(
                    f"Unknown object in digest algorithms: {actual}",
                    actual_type=actual,
                )
        # The record owns its parts: later changes to the caller's objects
        # must not leak into the encoding, equality or hash.
        object.__setattr__(
            self, "digest_algorithms", tuple(_detached(algorithm) for algorithm in algorithms)
        )
        object.__setattr__(
            self, "archive_time_stamp_sequence", _detached(self.archive_time_stamp_sequence)
        )
        if self.crypto_infos is not None:
            object.__setattr__(self, "crypto_infos", _detached(self.crypto_infos))
        if self.encryption_info is not None:
            object.__setattr__(self, "encryption_info", _detached(self.encryption_info))

    @classmethod
    def create(
        cls,
        digest_algorithms: Iterable[algos.DigestAlgorithm],
        crypto_infos: CryptoInfos | None,
        encryption_info: EncryptionInfo | None,
        archive_time_stamp_sequence: ArchiveTimeStampSequence,
    ) -> EvidenceRecord:
        """Build a record from already typed parts.

        Only the digest algorithm types are checked; the time stamp
        sequence is trusted as given.
        """
        return cls(
            digest_algorithms=tuple(digest_algorithms),
            archive_time_stamp_sequence=archive_time_stamp_sequence,
            crypto_infos=crypto_infos,
            encryption_info=encryption_info,
        )

    @classmethod
    def load(cls, data: bytes) -> EvidenceRecord:
        return decode(data)

    @classmethod
    def from_object(cls, obj: Any) -> EvidenceRecord | None:
        """Coerce ``obj`` into a record.

        Accepts a record, its DER/BER bytes, a generic SEQUENCE element,
        the element list of that SEQUENCE, or any ``asn1crypto`` value.
        ``None`` is passed through.
        """
        if obj is None:
            return None
        if isinstance(obj, EvidenceRecord):
            return obj
        if isinstance(obj, (bytes, bytearray)):
            return decode(bytes(obj))
        if isinstance(obj, core.Asn1Value):
            return decode(obj.dump())
        if isinstance(obj, TLVElement):
            if not obj.is_universal(TAG_SEQUENCE):
                raise TypeMismatchError(
                    f"Expected SEQUENCE, found {obj.type_name}",
                    actual_type=obj.type_name,
                )
            return decode_elements(obj.children())
        if isinstance(obj, (list, tuple)) and all(isinstance(item, TLVElement) for item in obj):
            return decode_elements(obj)
        actual = type(obj).__name__
        raise TypeMismatchError(f"Cannot build an evidence record from {actual}", actual_type=actual)

    def get_digest_algorithms(self) -> list[algos.DigestAlgorithm]:
        """Return fresh copies of the digest algorithms, in record order."""
        return [algos.DigestAlgorithm.load(algorithm.dump()) for algorithm in self.digest_algorithms]

    def dump(self) -> bytes:
        return encode(self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EvidenceRecord):
            return NotImplemented
        return self.dump() == other.dump()

    def __hash__(self) -> int:
        return hash(self.dump())

    def __str__(self) -> str:
        return f"EvidenceRecord: Oid({EVIDENCE_RECORD_OID})"


def _detached(value: Any) -> Any:
    """Return an independent copy of an ``asn1crypto`` value."""
    return type(value).load(value.dump())


def _load_typed(spec: type[core.Asn1Value], element: TLVElement, component: str) -> Any:
    """Decode ``element`` with ``spec`` and parse it completely.

    ``asn1crypto`` parses children lazily; reading ``native`` walks the whole
    value so that every error is raised here rather than on first access.
    Only collaborator code runs inside the ``try``, and corrupt input can make
    it fail with any exception type, so all of them are wrapped.
    """
    try:
        value = spec.load(element.encoded, strict=True)
        _ = value.native
    except Exception as exc:
        raise NestedDecodeError(component, str(exc)) from exc
    return value


def _decode_version(element: TLVElement) -> int:
    if not element.is_universal(TAG_INTEGER) or element.is_constructed:
        raise TypeMismatchError(
            f"Expected INTEGER version, found {element.type_name}",
            actual_type=element.type_name,
        )
    version = _load_typed(core.Integer, element, "version").native
    if version != EVIDENCE_RECORD_V1:
        raise UnsupportedVersionError(version, EVIDENCE_RECORD_V1)
    return int(version)


def _decode_digest_algorithms(element: TLVElement) -> tuple[algos.DigestAlgorithm, ...]:
    if not element.is_universal(TAG_SEQUENCE):
        raise TypeMismatchError(
            f"Expected SEQUENCE OF AlgorithmIdentifier, found {element.type_name}",
            actual_type=element.type_name,
        )
    algorithms = []
    for index, child in enumerate(element.children()):
        if not child.is_universal(TAG_SEQUENCE) or not child.is_constructed:
            raise TypeMismatchError(
                f"Unknown object in digest algorithms at index {index}: {child.type_name}",
                actual_type=child.type_name,
            )
        algorithms.append(
            _load_typed(algos.DigestAlgorithm, child, f"digestAlgorithms[{index}]")
        )
    return tuple(algorithms)


def _decode_optional_fields(
    elements: Sequence[TLVElement],
    *,
    allow_duplicates: bool,
) -> dict[OptionalField, Any]:
    found: dict[OptionalField, Any] = {}
    for element in elements:
        if not element.is_context_tagged:
            raise TypeMismatchError(
                f"Unknown object in evidence record: {element.type_name}",
                actual_type=element.type_name,
            )
        try:
            optional_field = OptionalField(element.tag)
        except ValueError:
            raise UnknownTagError(element.tag) from None

        component, spec = _OPTIONAL_FIELD_SPECS[optional_field]
        if optional_field in found:
            if not allow_duplicates:
                raise MalformedStructureError(
                    f"Duplicate [{element.tag}] {component} in evidence record"
                )
            logger.warning(
                "evidence_record_duplicate_tag",
                tag=element.tag,
                component=component,
            )
        if not element.is_constructed:
            raise TypeMismatchError(
                f"Expected constructed [{element.tag}] {component}, found primitive",
                actual_type=element.type_name,
            )
        # Implicit tagging: same contents, universal SEQUENCE identifier.
        untagged = element.retag(CLASS_UNIVERSAL, TAG_SEQUENCE)
        found[optional_field] = _load_typed(spec, untagged, component)
    return found


def decode_elements(
    elements: Iterable[TLVElement],
    *,
    allow_duplicate_tags: bool | None = None,
) -> EvidenceRecord:
    """Decode the element list of an EvidenceRecord SEQUENCE.

    Parameters
    ----------
    elements:
        The direct children of the outer SEQUENCE, in encoded order.
    allow_duplicate_tags:
        Keep the last of repeated ``[0]``/``[1]`` elements instead of
        rejecting them. Defaults to ``ers_allow_duplicate_optional_fields``.

    Returns
    -------
    EvidenceRecord
        The fully validated record.

    Raises
    ------
    EvidenceRecordError
        One of its subclasses, describing the first violation found.
    """
    items = tuple(elements)
    if allow_duplicate_tags is None:
        allow_duplicate_tags = get_settings().ers_allow_duplicate_optional_fields

    try:
        count = len(items)
        if not MIN_ELEMENTS <= count <= MAX_ELEMENTS:
            raise MalformedStructureError(
                f"Wrong number of elements in evidence record: {count} "
                f"(expected {MIN_ELEMENTS} to {MAX_ELEMENTS})"
            )

        _decode_version(items[0])
        digest_algorithms = _decode_digest_algorithms(items[1])
        optional = _decode_optional_fields(items[2:-1], allow_duplicates=allow_duplicate_tags)
        archive_time_stamp_sequence = _load_typed(
            ArchiveTimeStampSequence, items[-1], "archiveTimeStampSequence"
        )
    except EvidenceRecordError as exc:
        logger.debug(
            "evidence_record_rejected",
            error=type(exc).__name__,
            detail=str(exc),
        )
        raise

    logger.debug(
        "evidence_record_decoded",
        digest_algorithms=len(digest_algorithms),
        crypto_infos=OptionalField.CRYPTO_INFOS in optional,
        encryption_info=OptionalField.ENCRYPTION_INFO in optional,
    )
    return EvidenceRecord(
        digest_algorithms=digest_algorithms,
        archive_time_stamp_sequence=archive_time_stamp_sequence,
        crypto_infos=optional.get(OptionalField.CRYPTO_INFOS),
        encryption_info=optional.get(OptionalField.ENCRYPTION_INFO),
    )


def decode(
    data: bytes,
    *,
    strict: bool | None = None,
    allow_duplicate_tags: bool | None = None,
) -> EvidenceRecord:
    """Decode a DER/BER encoded EvidenceRecord.

    ``strict`` rejects bytes after the outer SEQUENCE and defaults to
    ``ers_strict_der``.
    """
    if strict is None:
        strict = get_settings().ers_strict_der
    try:
        elements = load_sequence(data, strict=strict)
    except EvidenceRecordError as exc:
        logger.debug(
            "evidence_record_rejected",
            error=type(exc).__name__,
            detail=str(exc),
        )
        raise
    return decode_elements(elements, allow_duplicate_tags=allow_duplicate_tags)


def encode_elements(record: EvidenceRecord) -> tuple[TLVElement, ...]:
    """Return the element list of ``record`` in canonical order."""
    elements = [
        TLVElement.from_value(core.Integer(record.version)),
        TLVElement.from_value(DigestAlgorithms(list(record.digest_algorithms))),
    ]
    optional = (
        (OptionalField.CRYPTO_INFOS, record.crypto_infos),
        (OptionalField.ENCRYPTION_INFO, record.encryption_info),
    )
    for optional_field, value in optional:
        if value is not None:
            elements.append(
                TLVElement.from_value(value).retag(CLASS_CONTEXT, int(optional_field))
            )
    elements.append(TLVElement.from_value(record.archive_time_stamp_sequence))
    return tuple(elements)


def encode(record: EvidenceRecord) -> bytes:
    """DER-encode ``record`` as a SEQUENCE."""
    return dump_sequence(encode_elements(record))
