"""
Evidence Record Syntax (RFC 4998) ASN.1 modules.

- **tlv**: generic tag-length-value elements over ``asn1crypto.parser``
- **structures**: typed specs for the nested ERS structures
- **evidence_record**: EvidenceRecord decoding, validation and encoding
- **errors**: decoding error hierarchy
"""

from ers_codec.asn1.errors import (
    EvidenceRecordError,
    MalformedStructureError,
    NestedDecodeError,
    TypeMismatchError,
    UnknownTagError,
    UnsupportedVersionError,
)
from ers_codec.asn1.evidence_record import (
    EVIDENCE_RECORD_OID,
    EVIDENCE_RECORD_V1,
    EvidenceRecord,
    OptionalField,
    decode,
    decode_elements,
    encode,
    encode_elements,
)
from ers_codec.asn1.structures import (
    ArchiveTimeStamp,
    ArchiveTimeStampChain,
    ArchiveTimeStampSequence,
    Attribute,
    CryptoInfos,
    DigestAlgorithms,
    EncryptionInfo,
    PartialHashtree,
)
from ers_codec.asn1.tlv import TLVElement, dump_sequence, load_sequence

__all__ = [
    "EVIDENCE_RECORD_OID",
    "EVIDENCE_RECORD_V1",
    "EvidenceRecord",
    "OptionalField",
    "decode",
    "decode_elements",
    "encode",
    "encode_elements",
    "TLVElement",
    "load_sequence",
    "dump_sequence",
    "ArchiveTimeStamp",
    "ArchiveTimeStampChain",
    "ArchiveTimeStampSequence",
    "Attribute",
    "CryptoInfos",
    "DigestAlgorithms",
    "EncryptionInfo",
    "PartialHashtree",
    "EvidenceRecordError",
    "MalformedStructureError",
    "NestedDecodeError",
    "TypeMismatchError",
    "UnknownTagError",
    "UnsupportedVersionError",
]
