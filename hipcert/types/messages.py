# SPDX-License-Identifier: Apache-2.0
# Copyright (C) 2024-2026 The Birthmark Standard Foundation

"""Pydantic schemas for messages exchanged with the certificate daemon."""

import base64
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .identity import hit_to_bytes, hit_to_text
from .record import CertificateRecord, VerificationStatus


class CertSpkiInfo(BaseModel):
    """SPKI certificate parameter carried in sign and verify requests."""

    public_key: str = Field("", description="(public_key ...) sequence")
    cert: str = Field("", description="(cert ...) sequence")
    signature: str = Field("", description="(signature ...) sequence")
    issuer_hit: str = Field("::", description="Issuer HIT, colon-hex")
    success: int = Field(0, description="0 if verified, -1 otherwise")

    @field_validator("issuer_hit")
    @classmethod
    def validate_hit(cls, v: str) -> str:
        """Normalize the issuer HIT to compressed colon-hex form."""
        return hit_to_text(v)

    @classmethod
    def from_record(cls, record: CertificateRecord) -> "CertSpkiInfo":
        return cls(
            public_key=record.public_key,
            cert=record.statement,
            signature=record.signature,
            issuer_hit=hit_to_text(record.issuer_identity),
            success=-1 if record.verified is VerificationStatus.FAILURE else 0,
        )

    def to_record(self, verified: VerificationStatus = VerificationStatus.UNKNOWN) -> CertificateRecord:
        return CertificateRecord(
            public_key=self.public_key,
            statement=self.cert,
            signature=self.signature,
            issuer_identity=hit_to_bytes(self.issuer_hit),
            verified=verified,
        )


class SpkiResponse(BaseModel):
    """Daemon answer to an SPKI sign or verify request."""

    cert_spki_info: Optional[CertSpkiInfo] = None
    error: int = 0


class X509Request(BaseModel):
    """X.509 issuance request for a subject HIT."""

    subject: str = Field(..., description="Subject HIT, colon-hex")

    @field_validator("subject")
    @classmethod
    def validate_subject(cls, v: str) -> str:
        return hit_to_text(v)


class X509VerificationRequest(BaseModel):
    """X.509 verification request carrying a PEM certificate."""

    certificate: str = Field(..., min_length=1, description="PEM-encoded certificate")


class X509Response(BaseModel):
    """Daemon answer carrying a DER certificate."""

    der: str = Field("", description="Base64-encoded DER certificate")

    def get_der_bytes(self) -> bytes:
        """Decode DER certificate from base64."""
        return base64.b64decode(self.der)


class X509ResponseEnvelope(BaseModel):
    """Top-level daemon answer to an X.509 request."""

    cert_x509_resp: Optional[X509Response] = None
    error: int = 0
