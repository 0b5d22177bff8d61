# SPDX-License-Identifier: Apache-2.0
# Copyright (C) 2024-2026 The Birthmark Standard Foundation

"""
Error taxonomy for SPKI certificate handling.

Every extraction, decode and verification step raises one of these. They all
derive from ValueError so callers that only care about "bad certificate" can
catch a single type.
"""

from typing import Optional


class CertificateError(ValueError):
    """Base class for all SPKI certificate errors."""


class PatternNotFound(CertificateError):
    """A field pattern did not match the certificate text."""

    def __init__(self, field: str, message: Optional[str] = None):
        self.field = field
        super().__init__(message or f"Field not found: {field}")


class PublicKeyNotFound(PatternNotFound):
    """The (public_key ...) sequence is missing from a certificate blob."""

    def __init__(self) -> None:
        super().__init__("public_key", "Public-key sequence not found")


class StatementNotFound(PatternNotFound):
    """The (cert ...) sequence is missing from a certificate blob."""

    def __init__(self) -> None:
        super().__init__("cert", "Cert sequence not found")


class SignatureNotFound(PatternNotFound):
    """The (signature ...) sequence is missing from a certificate blob."""

    def __init__(self) -> None:
        super().__init__("signature", "Signature sequence not found")


class AnchorNotFound(CertificateError):
    """An injection anchor does not occur in the statement."""

    def __init__(self, anchor: str):
        self.anchor = anchor
        super().__init__(f"Anchor not found: {anchor}")


class MalformedBase64(CertificateError):
    """A base64 field could not be decoded."""

    def __init__(self, field: str, reason: str = ""):
        self.field = field
        detail = f": {reason}" if reason else ""
        super().__init__(f"Malformed base64 in {field}{detail}")


class MalformedStatement(CertificateError):
    """Statement text is not a well-formed clause."""


class OversizedInput(CertificateError):
    """Input text exceeds the configured maximum certificate size."""

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(f"Certificate text is {size} bytes (limit {limit})")


class UnsupportedAlgorithm(CertificateError):
    """
    Public-key algorithm cannot be verified.

    ``recognized`` is True when the tag is known but has no implementation
    (ECDSA), False when no known tag was found at all.
    """

    def __init__(self, algorithm: str, recognized: bool = False):
        self.algorithm = algorithm
        self.recognized = recognized
        if recognized:
            message = f"Algorithm {algorithm} is recognized but not implemented"
        else:
            message = "Unknown public-key algorithm"
        super().__init__(message)


class DigestMismatch(CertificateError):
    """Embedded signature hash does not match the digest of the statement."""

    def __init__(self) -> None:
        super().__init__(
            "Signature hash did not match the digest of the cert sequence"
        )


class SignatureInvalid(CertificateError):
    """Signature did not verify against the public key."""


class PrimitiveError(CertificateError):
    """The underlying cryptographic primitive rejected its inputs."""


class CertificateExpired(CertificateError):
    """Statement is outside its not-before / not-after window."""
