# SPDX-License-Identifier: Apache-2.0
# Copyright (C) 2024-2026 The Birthmark Standard Foundation

"""
X.509 certificate validation for daemon-issued HIT certificates.
"""

import datetime
import logging
from dataclasses import dataclass
from typing import Optional

from cryptography import x509
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric import dsa, ec, padding, rsa

from .parser import CertificateParser


logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Result of certificate validation."""

    valid: bool
    error_message: Optional[str] = None
    certificate: Optional[x509.Certificate] = None


class X509Verifier:
    """Validate X.509 certificates against a set of trusted CAs."""

    def __init__(self, trusted_ca_certs: Optional[list[x509.Certificate]] = None):
        """
        Initialize certificate validator.

        Args:
            trusted_ca_certs: List of trusted CA certificates for signature checks
        """
        self.trusted_ca_certs = trusted_ca_certs or []

    def add_trusted_ca(self, ca_cert: x509.Certificate) -> None:
        """Add a trusted CA certificate."""
        self.trusted_ca_certs.append(ca_cert)

    def add_trusted_ca_from_bytes(self, ca_cert_bytes: bytes) -> None:
        """Add a trusted CA certificate from DER or PEM bytes."""
        self.add_trusted_ca(CertificateParser.load_certificate(ca_cert_bytes))

    def verify(
        self,
        cert_bytes: bytes,
        check_expiration: bool = True,
        check_signature: bool = True,
    ) -> ValidationResult:
        """
        Validate a DER- or PEM-encoded certificate.

        Args:
            cert_bytes: Certificate bytes
            check_expiration: Check if certificate is expired
            check_signature: Verify certificate signature against trusted CAs

        Returns:
            ValidationResult with the parsed certificate if valid
        """
        try:
            cert = CertificateParser.load_certificate(cert_bytes)
        except ValueError as e:
            return ValidationResult(
                valid=False,
                error_message=f"Certificate parsing failed: {e}"
            )

        if check_expiration:
            now = datetime.datetime.now(datetime.timezone.utc)
            if cert.not_valid_before_utc > now:
                return ValidationResult(
                    valid=False,
                    error_message=f"Certificate not yet valid (valid from {cert.not_valid_before_utc})"
                )
            if cert.not_valid_after_utc < now:
                return ValidationResult(
                    valid=False,
                    error_message=f"Certificate expired (expired {cert.not_valid_after_utc})"
                )

        if check_signature:
            if not self.trusted_ca_certs:
                return ValidationResult(
                    valid=False,
                    error_message="No trusted CA certificates configured"
                )

            if not any(self._verify_signature(cert, ca) for ca in self.trusted_ca_certs):
                logger.debug("X.509 signature did not verify against any trusted CA")
                return ValidationResult(
                    valid=False,
                    error_message="Certificate signature verification failed"
                )

        return ValidationResult(valid=True, certificate=cert)

    def _verify_signature(self, cert: x509.Certificate, ca_cert: x509.Certificate) -> bool:
        """
        Verify certificate signature using CA public key.

        Args:
            cert: Certificate to verify
            ca_cert: CA certificate containing public key

        Returns:
            True if signature is valid
        """
        if cert.issuer != ca_cert.subject:
            return False

        ca_public_key = ca_cert.public_key()
        hash_algorithm = cert.signature_hash_algorithm
        try:
            if isinstance(ca_public_key, rsa.RSAPublicKey):
                ca_public_key.verify(
                    cert.signature,
                    cert.tbs_certificate_bytes,
                    padding.PKCS1v15(),
                    hash_algorithm,
                )
            elif isinstance(ca_public_key, dsa.DSAPublicKey):
                ca_public_key.verify(
                    cert.signature,
                    cert.tbs_certificate_bytes,
                    hash_algorithm,
                )
            elif isinstance(ca_public_key, ec.EllipticCurvePublicKey):
                ca_public_key.verify(
                    cert.signature,
                    cert.tbs_certificate_bytes,
                    ec.ECDSA(hash_algorithm),
                )
            else:
                # Unsupported key type
                return False
            return True
        except InvalidSignature:
            return False
        except (TypeError, ValueError) as e:
            logger.debug(f"X.509 signature check error: {e}")
            return False
