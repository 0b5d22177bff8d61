# SPDX-License-Identifier: Apache-2.0
# Copyright (C) 2024-2026 The Birthmark Standard Foundation

"""
Signature verification for SPKI certificates.

Verification steps:
1. Detect the public-key algorithm (RSA or DSA)
2. Decode the key material from the public-key sequence
3. SHA-1 the exact cert sequence text
4. Compare the digest with the signature hash embedded in the signature
5. Decode the signature and check it with the public key
"""

import binascii
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric import padding
from cryptography.hazmat.primitives.asymmetric.utils import (
    Prehashed,
    encode_dss_signature,
)

from ..crypto import (
    SHA1_DIGEST_LENGTH,
    SIGNATURE_HASH,
    b64decode,
    compute_statement_digest,
    constant_time_compare,
    int_from_bytes,
)
from ..types import CertificateRecord, VerificationStatus
from . import patterns
from .decoder import parse_statement
from .errors import (
    CertificateError,
    CertificateExpired,
    DigestMismatch,
    MalformedBase64,
    PrimitiveError,
    SignatureInvalid,
)
from .keys import Algorithm, DSAKeyMaterial, KeyMaterial, RSAKeyMaterial, decode_key_material


logger = logging.getLogger(__name__)

# Width in bytes of each of r and s in a DSA signature for this suite
DSA_PRIV = 20

# DSA signature blob: one T byte, then r, then s
DSA_SIGNATURE_LENGTH = 1 + 2 * DSA_PRIV


@dataclass
class VerificationResult:
    """Result of verifying one certificate record."""

    status: VerificationStatus
    algorithm: Optional[Algorithm] = None
    error: Optional[CertificateError] = None

    @property
    def valid(self) -> bool:
        return self.status is VerificationStatus.SUCCESS

    @property
    def error_message(self) -> Optional[str]:
        return str(self.error) if self.error is not None else None


def _decode_signature_field(pattern, text: str, field: str, strip_left: int) -> bytes:
    encoded = patterns.extract(pattern, text, field, strip=(strip_left, 1))
    try:
        return b64decode(encoded)
    except (binascii.Error, ValueError) as e:
        raise MalformedBase64(field, str(e)) from e


def extract_signature_hash(signature_text: str) -> bytes:
    """Decode the first ``|...|`` field of the signature sequence."""
    return _decode_signature_field(patterns.SIGNATURE_HASH, signature_text, "signature_hash", 1)


def extract_signature(signature_text: str) -> bytes:
    """Decode the ``)|...|`` field of the signature sequence."""
    return _decode_signature_field(patterns.SIGNATURE, signature_text, "signature", 2)


def _verify_rsa(key: RSAKeyMaterial, digest: bytes, signature: bytes) -> None:
    try:
        public_key = key.to_public_key()
    except ValueError as e:
        raise PrimitiveError(f"Invalid RSA public key: {e}") from e

    try:
        public_key.verify(
            signature,
            digest,
            padding.PKCS1v15(),
            Prehashed(SIGNATURE_HASH),
        )
    except InvalidSignature as e:
        raise SignatureInvalid("RSA signature verification failed") from e
    except ValueError as e:
        raise PrimitiveError(f"RSA verification error: {e}") from e


def _verify_dsa(key: DSAKeyMaterial, digest: bytes, signature: bytes) -> None:
    if len(signature) < DSA_SIGNATURE_LENGTH:
        raise SignatureInvalid(
            f"DSA signature is {len(signature)} bytes (expected {DSA_SIGNATURE_LENGTH})"
        )

    # First byte is the T parameter, not part of (r, s)
    r = int_from_bytes(signature[1:1 + DSA_PRIV])
    s = int_from_bytes(signature[1 + DSA_PRIV:1 + 2 * DSA_PRIV])

    try:
        public_key = key.to_public_key()
    except ValueError as e:
        raise PrimitiveError(f"Invalid DSA public key: {e}") from e

    try:
        public_key.verify(
            encode_dss_signature(r, s),
            digest,
            Prehashed(SIGNATURE_HASH),
        )
    except InvalidSignature as e:
        raise SignatureInvalid("DSA signature verification failed") from e
    except ValueError as e:
        raise PrimitiveError(f"DSA verification error: {e}") from e


class SignatureVerifier:
    """Verify the signature of decoded SPKI certificate records."""

    def __init__(self, check_validity: bool = False):
        """
        Initialize signature verifier.

        Args:
            check_validity: Also reject statements outside their
                not-before / not-after window
        """
        self.check_validity = check_validity

    def verify_or_raise(self, record: CertificateRecord) -> Algorithm:
        """
        Verify ``record`` and raise on any failure.

        Sets ``record.verified`` to SUCCESS or FAILURE.

        Returns:
            Algorithm the certificate was signed with

        Raises:
            CertificateError: The specific reason verification failed
        """
        try:
            algorithm = self._verify(record)
        except CertificateError:
            record.verified = VerificationStatus.FAILURE
            raise
        record.verified = VerificationStatus.SUCCESS
        return algorithm

    def verify(self, record: CertificateRecord) -> VerificationResult:
        """
        Verify ``record`` and report the outcome.

        Sets ``record.verified`` to SUCCESS or FAILURE.

        Returns:
            VerificationResult carrying the error on failure
        """
        try:
            algorithm = self.verify_or_raise(record)
        except CertificateError as e:
            logger.warning(f"Certificate verification failed: {e}")
            return VerificationResult(status=VerificationStatus.FAILURE, error=e)

        logger.debug(f"Certificate verified ({algorithm.value})")
        return VerificationResult(status=VerificationStatus.SUCCESS, algorithm=algorithm)

    def _verify(self, record: CertificateRecord) -> Algorithm:
        logger.debug("Verifying: identifying public-key algorithm")
        algorithm, key = decode_key_material(record.public_key)

        digest = compute_statement_digest(record.statement)

        signature_hash = extract_signature_hash(record.signature)
        if len(signature_hash) < SHA1_DIGEST_LENGTH or not constant_time_compare(
            digest, signature_hash[:SHA1_DIGEST_LENGTH]
        ):
            logger.error("Signature hash did not match the digest of the cert sequence")
            raise DigestMismatch()

        signature = extract_signature(record.signature)

        if self.check_validity:
            self._check_validity(record.statement)

        self._check_signature(key, digest, signature)
        return algorithm

    @staticmethod
    def _check_signature(key: KeyMaterial, digest: bytes, signature: bytes) -> None:
        if isinstance(key, RSAKeyMaterial):
            _verify_rsa(key, digest, signature)
        else:
            _verify_dsa(key, digest, signature)

    @staticmethod
    def _check_validity(statement: str) -> None:
        fields = parse_statement(statement)
        now = datetime.now()
        if fields.not_before is not None and now < fields.not_before:
            raise CertificateExpired(f"Certificate not yet valid (valid from {fields.not_before})")
        if fields.not_after is not None and now > fields.not_after:
            raise CertificateExpired(f"Certificate expired (expired {fields.not_after})")


def verify(record: CertificateRecord) -> VerificationResult:
    """Verify ``record`` with the default verifier."""
    return SignatureVerifier().verify(record)
