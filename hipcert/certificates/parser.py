# SPDX-License-Identifier: Apache-2.0
# Copyright (C) 2024-2026 The Birthmark Standard Foundation

"""
X.509 certificate loading for the daemon-issued HIT certificates.
"""

import ipaddress
from typing import Optional

from cryptography import x509
from cryptography.hazmat.primitives import serialization
from cryptography.x509.oid import ExtensionOID, NameOID


PEM_MARKER = b"-----BEGIN CERTIFICATE-----"


class CertificateParser:
    """Parse X.509 certificates returned by the certificate daemon."""

    @staticmethod
    def load_certificate(cert_bytes: bytes) -> x509.Certificate:
        """
        Load a DER- or PEM-encoded certificate.

        Args:
            cert_bytes: Certificate bytes in either encoding

        Returns:
            Parsed X.509 certificate

        Raises:
            ValueError: If certificate cannot be parsed
        """
        try:
            if cert_bytes.lstrip().startswith(PEM_MARKER):
                return x509.load_pem_x509_certificate(cert_bytes)
            return x509.load_der_x509_certificate(cert_bytes)
        except Exception as e:
            raise ValueError(f"Failed to parse certificate: {e}")

    @staticmethod
    def to_pem(cert: x509.Certificate) -> str:
        """Encode certificate as PEM text (the daemon's verification input)."""
        return cert.public_bytes(serialization.Encoding.PEM).decode("ascii")

    @staticmethod
    def to_der(cert: x509.Certificate) -> bytes:
        return cert.public_bytes(serialization.Encoding.DER)

    @staticmethod
    def get_subject_field(cert: x509.Certificate, oid: x509.ObjectIdentifier) -> Optional[str]:
        """
        Extract subject field from certificate.

        Args:
            cert: Parsed certificate
            oid: OID to extract (e.g., NameOID.COMMON_NAME)

        Returns:
            Field value or None if not present
        """
        try:
            return cert.subject.get_attributes_for_oid(oid)[0].value
        except (IndexError, AttributeError):
            return None

    @staticmethod
    def get_issuer_field(cert: x509.Certificate, oid: x509.ObjectIdentifier) -> Optional[str]:
        """Extract issuer field from certificate, or None if not present."""
        try:
            return cert.issuer.get_attributes_for_oid(oid)[0].value
        except (IndexError, AttributeError):
            return None

    @classmethod
    def get_subject_hit(cls, cert: x509.Certificate) -> Optional[ipaddress.IPv6Address]:
        """
        Return the subject HIT of a certificate.

        The HIT is taken from an IP address subjectAltName if present,
        otherwise from a subject common name holding colon-hex text.
        """
        try:
            san = cert.extensions.get_extension_for_oid(ExtensionOID.SUBJECT_ALTERNATIVE_NAME)
            for address in san.value.get_values_for_type(x509.IPAddress):
                if isinstance(address, ipaddress.IPv6Address):
                    return address
        except x509.ExtensionNotFound:
            pass

        common_name = cls.get_subject_field(cert, NameOID.COMMON_NAME)
        if common_name is None:
            return None
        try:
            return ipaddress.IPv6Address(common_name)
        except ipaddress.AddressValueError:
            return None
