# SPDX-License-Identifier: Apache-2.0
# Copyright (C) 2024-2026 The Birthmark Standard Foundation

"""
Certificate decoding: split a raw certificate blob into its three sequences
and read the signed statement back into fields.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..config import settings
from ..types import CertificateRecord
from . import patterns, sexp
from .errors import (
    MalformedStatement,
    OversizedInput,
    PatternNotFound,
    PublicKeyNotFound,
    SignatureNotFound,
    StatementNotFound,
)


logger = logging.getLogger(__name__)

TIME_FORMAT = "%Y-%m-%d_%H:%M:%S"


@dataclass
class Principal:
    """Issuer or subject of a statement: ``(hash <type> <identity>)``."""

    identity_type: str
    identity: str


@dataclass
class StatementFields:
    """Fields read back out of a ``(cert ...)`` statement."""

    issuer: Optional[Principal]
    subject: Optional[Principal]
    not_before: Optional[datetime]
    not_after: Optional[datetime]

    def is_valid_at(self, moment: datetime) -> bool:
        """True if ``moment`` (local time) falls inside the validity window."""
        if self.not_before is not None and moment < self.not_before:
            return False
        if self.not_after is not None and moment > self.not_after:
            return False
        return True


class CertificateDecoder:
    """Decode certificate blobs into CertificateRecord instances."""

    def __init__(self, max_size: Optional[int] = None):
        """
        Initialize certificate decoder.

        Args:
            max_size: Largest accepted blob in bytes (defaults to config)
        """
        self.max_size = max_size if max_size is not None else settings.max_certificate_size

    def decode(self, raw_blob: str) -> CertificateRecord:
        """
        Split a certificate blob into public-key, cert and signature sequences.

        Decoding is all or nothing: the first missing sequence raises and no
        partial record is returned.

        Args:
            raw_blob: Whole certificate text

        Returns:
            CertificateRecord with public_key, statement and signature set

        Raises:
            OversizedInput: If the blob is larger than max_size
            PublicKeyNotFound: If "(public_key ... |)))" is missing
            StatementNotFound: If "(cert ... "))" is missing
            SignatureNotFound: If "(signature ... |))" is missing
            MalformedStatement: If the cert sequence is not balanced
        """
        if len(raw_blob) > self.max_size:
            raise OversizedInput(len(raw_blob), self.max_size)

        try:
            public_key = patterns.extract(patterns.PUBLIC_KEY_SEQUENCE, raw_blob, "public_key")
        except PatternNotFound as e:
            logger.error("Failed to find the public-key sequence")
            raise PublicKeyNotFound() from e

        try:
            statement = patterns.extract(patterns.CERT_SEQUENCE, raw_blob, "cert")
        except PatternNotFound as e:
            logger.error("Failed to find the cert sequence")
            raise StatementNotFound() from e

        try:
            signature = patterns.extract(patterns.SIGNATURE_SEQUENCE, raw_blob, "signature")
        except PatternNotFound as e:
            logger.error("Failed to find the signature sequence")
            raise SignatureNotFound() from e

        if not sexp.is_well_formed(statement):
            raise MalformedStatement("Decoded cert sequence is not balanced")

        logger.debug(
            f"Decoded certificate: public_key={len(public_key)} "
            f"cert={len(statement)} signature={len(signature)} chars"
        )
        return CertificateRecord(
            public_key=public_key,
            statement=statement,
            signature=signature,
        )


def _principal(clause: Optional[sexp.Clause]) -> Optional[Principal]:
    if clause is None:
        return None
    hash_clause = clause.find("hash")
    if hash_clause is None or len(hash_clause.atoms) != 2:
        raise MalformedStatement(f"Malformed {clause.tag} clause")
    identity_type, identity = hash_clause.atoms
    return Principal(identity_type=identity_type, identity=identity)


def _timestamp(clause: Optional[sexp.Clause]) -> Optional[datetime]:
    if clause is None:
        return None
    if len(clause.atoms) != 1:
        raise MalformedStatement(f"Malformed {clause.tag} clause")
    try:
        return datetime.strptime(sexp.unquote(clause.atoms[0]), TIME_FORMAT)
    except ValueError as e:
        raise MalformedStatement(f"Invalid {clause.tag} time: {e}") from e


def parse_statement(statement: str) -> StatementFields:
    """
    Read issuer, subject and validity window out of a cert sequence.

    Raises:
        MalformedStatement: If the text is not a cert clause or a field is
            malformed
    """
    root = sexp.parse(statement)
    if root.tag != "cert":
        raise MalformedStatement(f"Expected cert clause, got {root.tag}")

    return StatementFields(
        issuer=_principal(root.find("issuer")),
        subject=_principal(root.find("subject")),
        not_before=_timestamp(root.find("not-before")),
        not_after=_timestamp(root.find("not-after")),
    )


def decode(raw_blob: str) -> CertificateRecord:
    """Decode a certificate blob with the default decoder."""
    return CertificateDecoder().decode(raw_blob)
