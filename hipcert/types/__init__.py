"""
hipcert - Core Data Types

Data structures shared by the SPKI codec, verifier and daemon client.

Modules:
    record: CertificateRecord and VerificationStatus
    identity: HIT conversion helpers

Example Usage:
    >>> from hipcert.types import CertificateRecord, hit_to_bytes
    >>>
    >>> record = CertificateRecord(
    ...     statement='(cert (issuer (hash hit 2001:10::1)))',
    ...     issuer_identity=hit_to_bytes("2001:10::1"),
    ... )
"""

from .record import (
    CertificateRecord,
    VerificationStatus,
)

from .identity import (
    HIT_LENGTH,
    HitLike,
    hit_to_address,
    hit_to_bytes,
    hit_to_text,
)

__all__ = [
    # Record
    "CertificateRecord",
    "VerificationStatus",
    # Identity
    "HIT_LENGTH",
    "HitLike",
    "hit_to_address",
    "hit_to_bytes",
    "hit_to_text",
]
