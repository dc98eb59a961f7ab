"""
Pytest fixtures for codec testing.
Provides settings isolation and sample ERS sub-structures.
"""

import pytest
import structlog
from asn1crypto import algos, cms, core

from ers_codec.asn1.structures import (
    ArchiveTimeStamp,
    ArchiveTimeStampChain,
    ArchiveTimeStampSequence,
    Attribute,
    CryptoInfos,
    EncryptionInfo,
)
from ers_codec.core.config import get_settings


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch):
    """Drop cached settings and any codec overrides from the environment."""
    for name in ("ERS_ALLOW_DUPLICATE_OPTIONAL_FIELDS", "ERS_STRICT_DER", "ENVIRONMENT", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    structlog.reset_defaults()


def make_time_stamps(token: bytes = b"timestamp-token") -> ArchiveTimeStampSequence:
    time_stamp = cms.ContentInfo({"content_type": "data", "content": core.OctetString(token)})
    chain = ArchiveTimeStampChain([ArchiveTimeStamp({"time_stamp": time_stamp})])
    return ArchiveTimeStampSequence([chain])


def make_crypto_infos(value: str = "crypto-info") -> CryptoInfos:
    attribute = Attribute({"type": "1.2.3.4", "values": [core.UTF8String(value)]})
    return CryptoInfos([attribute])


@pytest.fixture
def sha256() -> algos.DigestAlgorithm:
    return algos.DigestAlgorithm({"algorithm": "sha256"})


@pytest.fixture
def sha512() -> algos.DigestAlgorithm:
    return algos.DigestAlgorithm({"algorithm": "sha512"})


@pytest.fixture
def time_stamps() -> ArchiveTimeStampSequence:
    return make_time_stamps()


@pytest.fixture
def crypto_infos() -> CryptoInfos:
    return make_crypto_infos()


@pytest.fixture
def encryption_info() -> EncryptionInfo:
    return EncryptionInfo(
        {
            "encryption_info_type": "1.2.3.5",
            "encryption_info_value": core.OctetString(b"wrapped-key"),
        }
    )
