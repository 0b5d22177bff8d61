# SPDX-License-Identifier: Apache-2.0
# Copyright (C) 2024-2026 The Birthmark Standard Foundation

"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta

import pytest
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import dsa, padding, rsa
from cryptography.hazmat.primitives.asymmetric.utils import Prehashed, decode_dss_signature

from hipcert.crypto import b64encode, compute_statement_digest
from hipcert.spki import CertificateBuilder
from hipcert.types import CertificateRecord


ISSUER_HIT = "2001:10:7f26:ab0e:1a3c:98bd:d3c0:1f5"
SUBJECT_HIT = "2001:10:91c4:2b7a:8e11:4f0d:6a2e:c3b9"

GOLDEN_NOT_BEFORE = datetime(2010, 1, 1, 0, 0, 0)
GOLDEN_NOT_AFTER = datetime(2010, 1, 2, 12, 30, 45)
GOLDEN_STATEMENT = (
    '(cert (issuer (hash hit 2001:10::1))(subject (hash hit 2001:10::2))'
    '(not-before "2010-01-01_00:00:00")(not-after "2010-01-02_12:30:45"))'
)


def rsa_public_key_sequence(public_key: rsa.RSAPublicKey) -> str:
    """Render an RSA public key the way the certificate daemon does."""
    numbers = public_key.public_numbers()
    modulus = numbers.n.to_bytes(public_key.key_size // 8, "big")
    return f"(public_key (rsa-pkcs1-sha1 (e #{numbers.e:06X}#)(n |{b64encode(modulus)}|)))"


def dsa_public_key_sequence(public_key: dsa.DSAPublicKey) -> str:
    """Render a DSA public key the way the certificate daemon does."""
    numbers = public_key.public_numbers()
    params = numbers.parameter_numbers

    def field(value: int) -> str:
        return b64encode(value.to_bytes((value.bit_length() + 7) // 8, "big"))

    return (
        f"(public_key (dsa-pkcs1-sha1 (p |{field(params.p)}|)(q |{field(params.q)}|)"
        f"(g |{field(params.g)}|)(y |{field(numbers.y)}|)))"
    )


def signature_sequence(digest: bytes, signature: bytes) -> str:
    return f"(signature (hash sha1 |{b64encode(digest)}|)|{b64encode(signature)}|)"


def sign_rsa(private_key: rsa.RSAPrivateKey, record: CertificateRecord) -> CertificateRecord:
    """Fill in public_key and signature for ``record`` with an RSA key."""
    digest = compute_statement_digest(record.statement)
    signature = private_key.sign(digest, padding.PKCS1v15(), Prehashed(hashes.SHA1()))
    return CertificateRecord(
        public_key=rsa_public_key_sequence(private_key.public_key()),
        statement=record.statement,
        signature=signature_sequence(digest, signature),
        issuer_identity=record.issuer_identity,
    )


def sign_dsa(private_key: dsa.DSAPrivateKey, record: CertificateRecord) -> CertificateRecord:
    """Fill in public_key and signature for ``record`` with a DSA key."""
    digest = compute_statement_digest(record.statement)
    r, s = decode_dss_signature(private_key.sign(digest, Prehashed(hashes.SHA1())))
    # T parameter, then r and s at 20 bytes each
    signature = bytes([8]) + r.to_bytes(20, "big") + s.to_bytes(20, "big")
    return CertificateRecord(
        public_key=dsa_public_key_sequence(private_key.public_key()),
        statement=record.statement,
        signature=signature_sequence(digest, signature),
        issuer_identity=record.issuer_identity,
    )


@pytest.fixture(scope="session")
def rsa_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=1024)


@pytest.fixture(scope="session")
def rsa_key_2048():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def dsa_key():
    return dsa.generate_private_key(key_size=1024)


@pytest.fixture
def validity():
    """Validity window around the current time."""
    now = datetime.now().replace(microsecond=0)
    return now - timedelta(hours=1), now + timedelta(hours=1)


@pytest.fixture
def unsigned_record(validity):
    not_before, not_after = validity
    return CertificateBuilder().build(ISSUER_HIT, SUBJECT_HIT, not_before, not_after)


@pytest.fixture
def rsa_record(rsa_key, unsigned_record):
    return sign_rsa(rsa_key, unsigned_record)


@pytest.fixture
def dsa_record(dsa_key, unsigned_record):
    return sign_dsa(dsa_key, unsigned_record)
