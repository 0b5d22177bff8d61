# SPDX-License-Identifier: Apache-2.0
# Copyright (C) 2024-2026 The Birthmark Standard Foundation

"""
SPKI statement generation.

The unsigned statement is built as a clause tree and rendered once at the
end. Every sub-clause is injected right after the tag of an anchor clause, so
the last injection at a given anchor ends up first. For a HIT-to-HIT
certificate the rendered statement is:

    (cert (issuer (hash hit 2001:10::1))(subject (hash hit 2001:10::2))
          (not-before "2010-01-01_00:00:00")(not-after "2010-01-02_00:00:00"))

(shown wrapped; the real text has no line break or indentation).
"""

import logging
import re
import time
from datetime import datetime, timedelta
from typing import Callable, Optional, Union

from ..config import settings
from ..types import CertificateRecord, HitLike, hit_to_bytes, hit_to_text
from . import patterns, sexp
from .errors import AnchorNotFound, MalformedStatement, PatternNotFound


logger = logging.getLogger(__name__)

TIME_FORMAT = "%Y-%m-%d_%H:%M:%S"

Timestamp = Union[datetime, int, float]

# Callable that takes an unsigned record and returns it with public_key and
# signature filled in (normally DaemonClient.sign_spki)
Signer = Callable[[CertificateRecord], CertificateRecord]


def build_skeleton() -> str:
    """Return the minimal statement, ``(cert )``."""
    return _skeleton().render()


def _skeleton() -> sexp.Clause:
    return sexp.Clause("cert")


def inject(statement: str, anchor_tag: str, fragment: str) -> str:
    """
    Insert ``fragment`` right after the first occurrence of ``anchor_tag``.

    The character following the anchor (the separator space) stays in front
    of the fragment; everything after the insertion point is kept unchanged.

    Example:
        >>> inject("(cert )", "cert", "(subject )")
        '(cert (subject ))'

    Raises:
        AnchorNotFound: If ``anchor_tag`` does not occur in ``statement``
    """
    try:
        span = patterns.find(re.escape(anchor_tag), statement, anchor_tag)
    except PatternNotFound as e:
        raise AnchorNotFound(anchor_tag) from e

    position = min(span.end + 1, len(statement))
    return statement[:position] + fragment + statement[position:]


def format_time(value: Timestamp) -> str:
    """
    Render a timestamp as ``YYYY-MM-DD_HH:MM:SS`` in local time.

    Naive datetimes are taken to be local time already; aware datetimes and
    epoch seconds are converted to local time.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.strftime(TIME_FORMAT)
    return time.strftime(TIME_FORMAT, time.localtime(value))


def validity_clause(tag: str, value: Timestamp) -> sexp.Clause:
    """``(not-before "...")`` / ``(not-after "...")``"""
    return sexp.Clause(tag, [sexp.quoted(format_time(value))])


def identity_clause(identity_type: str, identity: HitLike) -> sexp.Clause:
    """``(hash <type> <colon-hex identity>)``"""
    return sexp.Clause("hash", [identity_type, hit_to_text(identity)])


def _inject(root: sexp.Clause, anchor: str, item: sexp.Clause) -> None:
    if not root.inject(anchor, item):
        raise AnchorNotFound(anchor)


def assemble(
    issuer_identity: HitLike,
    issuer_type: str,
    subject_identity: HitLike,
    subject_type: str,
    not_before: Timestamp,
    not_after: Timestamp,
) -> str:
    """
    Build the unsigned statement text.

    Injection order: not-after and not-before after "cert", an empty subject
    after "cert", the subject hash after "subject", an empty issuer after
    "cert", the issuer hash after "issuer".

    Args:
        issuer_identity: Issuer HIT (bytes, text or IPv6Address)
        issuer_type: Issuer identity type, "hit" for HIP
        subject_identity: Subject HIT
        subject_type: Subject identity type
        not_before: Start of validity
        not_after: End of validity

    Returns:
        Statement text ready to be signed

    Raises:
        ValueError: If an identity is not a valid HIT
    """
    root = _skeleton()

    _inject(root, "cert", validity_clause("not-after", not_after))
    _inject(root, "cert", validity_clause("not-before", not_before))
    _inject(root, "cert", sexp.Clause("subject"))
    _inject(root, "subject", identity_clause(subject_type, subject_identity))
    _inject(root, "cert", sexp.Clause("issuer"))
    _inject(root, "issuer", identity_clause(issuer_type, issuer_identity))

    statement = root.render()
    if not sexp.is_well_formed(statement):
        raise MalformedStatement("Built statement is not balanced")

    logger.debug(f"Assembled statement: {statement}")
    return statement


class CertificateBuilder:
    """Build HIT-to-HIT SPKI certificates and hand them to a signer."""

    def __init__(self, signer: Optional[Signer] = None, identity_type: Optional[str] = None):
        """
        Initialize certificate builder.

        Args:
            signer: Callable that signs an unsigned record
            identity_type: Identity type for issuer and subject (defaults to config)
        """
        self.signer = signer
        self.identity_type = identity_type or settings.default_identity_type

    def build(
        self,
        issuer: HitLike,
        subject: HitLike,
        not_before: Optional[Timestamp] = None,
        not_after: Optional[Timestamp] = None,
    ) -> CertificateRecord:
        """
        Build an unsigned record.

        Validity defaults to now until now + settings.default_validity_seconds.
        """
        if not_before is None:
            not_before = datetime.now()
        if not_after is None:
            start = not_before if isinstance(not_before, datetime) else datetime.fromtimestamp(not_before)
            not_after = start + timedelta(seconds=settings.default_validity_seconds)

        statement = assemble(
            issuer, self.identity_type,
            subject, self.identity_type,
            not_before, not_after,
        )
        return CertificateRecord(
            statement=statement,
            issuer_identity=hit_to_bytes(issuer),
        )

    def create(
        self,
        issuer: HitLike,
        subject: HitLike,
        not_before: Optional[Timestamp] = None,
        not_after: Optional[Timestamp] = None,
    ) -> CertificateRecord:
        """
        Build a statement and have it signed.

        Returns:
            Record with public_key and signature filled in by the signer

        Raises:
            ValueError: If no signer is configured or it returns an unsigned record
        """
        if self.signer is None:
            raise ValueError("No signer configured")

        record = self.build(issuer, subject, not_before, not_after)
        logger.debug("Sending statement to signer")
        signed = self.signer(record)

        if not signed.is_signed:
            raise ValueError("Signer did not return public-key and signature sequences")
        if signed.statement != record.statement:
            raise ValueError("Signer modified the cert sequence")
        return signed
