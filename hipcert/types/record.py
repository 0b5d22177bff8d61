# SPDX-License-Identifier: Apache-2.0
# Copyright (C) 2024-2026 The Birthmark Standard Foundation

"""
Certificate record passed between the SPKI builder, decoder and verifier.

The record mirrors what the certificate daemon exchanges: three text
sequences, the issuer HIT, and the verification outcome.
"""

from dataclasses import dataclass, field
from enum import Enum

from .identity import HIT_LENGTH


class VerificationStatus(str, Enum):
    """Tri-state verification outcome. Only the verifier changes it."""

    UNKNOWN = "unknown"
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass
class CertificateRecord:
    """
    One SPKI certificate split into its sequences.

    Attributes:
        public_key: "(public_key ...)" sequence text, empty until signed
        statement: "(cert ...)" sequence text, the exact bytes that are digested
        signature: "(signature ...)" sequence text, empty until signed
        issuer_identity: 16-byte issuer HIT copied in when the statement is built
        verified: Outcome of the last verification
    """

    public_key: str = ""
    statement: str = ""
    signature: str = ""
    issuer_identity: bytes = field(default=b"\x00" * HIT_LENGTH)
    verified: VerificationStatus = VerificationStatus.UNKNOWN

    def __post_init__(self) -> None:
        """Validate field constraints."""
        if len(self.issuer_identity) != HIT_LENGTH:
            raise ValueError(
                f"Invalid issuer_identity length: {len(self.issuer_identity)} "
                f"(expected {HIT_LENGTH})"
            )

    @property
    def is_signed(self) -> bool:
        """True once the public-key and signature sequences are present."""
        return bool(self.public_key and self.signature)

    def to_blob(self) -> str:
        """Join the three sequences into the single-text wire form."""
        return f"(sequence {self.public_key}{self.statement}{self.signature})"
