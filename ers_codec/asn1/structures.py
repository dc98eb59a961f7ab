"""
ASN.1 specs for the structures nested inside an RFC 4998 EvidenceRecord.

These are declarative ``asn1crypto`` definitions; parsing, lazy child
decoding and DER serialization are handled by the library.

::

    ArchiveTimeStampSequence ::= SEQUENCE OF ArchiveTimeStampChain
    ArchiveTimeStampChain    ::= SEQUENCE OF ArchiveTimeStamp

    ArchiveTimeStamp ::= SEQUENCE {
      digestAlgorithm  [0] AlgorithmIdentifier OPTIONAL,
      attributes       [1] Attributes OPTIONAL,
      reducedHashtree  [2] SEQUENCE OF PartialHashtree OPTIONAL,
      timeStamp        ContentInfo }

    PartialHashtree ::= SEQUENCE OF OCTET STRING
    Attributes      ::= SET SIZE (1..MAX) OF Attribute
    CryptoInfos     ::= SEQUENCE SIZE (1..MAX) OF Attribute

    EncryptionInfo ::= SEQUENCE {
      encryptionInfoType   OBJECT IDENTIFIER,
      encryptionInfoValue  ANY DEFINED BY encryptionInfoType }
"""

from __future__ import annotations

from asn1crypto import algos, cms, core  # type: ignore[import-untyped]


class AttributeValues(core.SetOf):
    _child_spec = core.Any


class Attribute(core.Sequence):
    _fields = [
        ("type", core.ObjectIdentifier),
        ("values", AttributeValues),
    ]


class Attributes(core.SetOf):
    _child_spec = Attribute


class CryptoInfos(core.SequenceOf):
    _child_spec = Attribute


class EncryptionInfo(core.Sequence):
    _fields = [
        ("encryption_info_type", core.ObjectIdentifier),
        ("encryption_info_value", core.Any),
    ]


class PartialHashtree(core.SequenceOf):
    _child_spec = core.OctetString


class PartialHashtrees(core.SequenceOf):
    _child_spec = PartialHashtree


class ArchiveTimeStamp(core.Sequence):
    _fields = [
        ("digest_algorithm", algos.DigestAlgorithm, {"implicit": 0, "optional": True}),
        ("attributes", Attributes, {"implicit": 1, "optional": True}),
        ("reduced_hashtree", PartialHashtrees, {"implicit": 2, "optional": True}),
        ("time_stamp", cms.ContentInfo),
    ]


class ArchiveTimeStampChain(core.SequenceOf):
    _child_spec = ArchiveTimeStamp


class ArchiveTimeStampSequence(core.SequenceOf):
    _child_spec = ArchiveTimeStampChain


class DigestAlgorithms(core.SequenceOf):
    _child_spec = algos.DigestAlgorithm
