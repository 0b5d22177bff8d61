# SPDX-License-Identifier: Apache-2.0
# Copyright (C) 2024-2026 The Birthmark Standard Foundation

"""
Pattern-based field extraction over SPKI certificate text.

The certificate grammar nests, so a single pattern only ever locates one
field. Higher layers chain several single-field lookups against fixed anchors
("cert", "subject", "issuer", "|", "#", ...).
"""

import re
from dataclasses import dataclass
from typing import Pattern, Union

from .errors import PatternNotFound


# Base64 alphabet as accepted inside |...| fields. Includes "(", ")" and "#".
B64_CLASS = r"[A-Za-z0-9+/()#=-]"

# Algorithm tags
DSA_TAG = re.compile(r"(?<![A-Za-z])dsa-pkcs1-sha1")
RSA_TAG = re.compile(r"rsa-pkcs1-sha1")
ECDSA_TAG = re.compile(r"ecdsa(?:-[A-Za-z0-9]+)+")

# RSA public key fields
RSA_EXPONENT = re.compile(r"#[0-9A-Fa-f]*#")
RSA_MODULUS = re.compile(r"\|" + B64_CLASS + r"*\|")

# DSA public key fields, anchored by their one-letter tag
DSA_P = re.compile(r"\(p \|" + B64_CLASS + r"*\|")
DSA_Q = re.compile(r"\(q \|" + B64_CLASS + r"*\|")
DSA_G = re.compile(r"\(g \|" + B64_CLASS + r"*\|")
DSA_Y = re.compile(r"\(y \|" + B64_CLASS + r"*\|")

# Signature sequence fields
SIGNATURE_HASH = re.compile(r"\|" + B64_CLASS + r"*\|")
SIGNATURE = re.compile(r"\)\|" + B64_CLASS + r"*\|")

# Whole sequences inside a certificate blob
PUBLIC_KEY_SEQUENCE = re.compile(r"\(public_key [ A-Za-z0-9+|/()#=-]*\|\)\)\)")
CERT_SEQUENCE = re.compile(r"\(cert [ A-Za-z0-9+|/():=_\"-]*\"\)\)")
SIGNATURE_SEQUENCE = re.compile(r"\(signature [ A-Za-z0-9+/|()=]*\|\)\)")


@dataclass(frozen=True)
class PatternMatch:
    """Span of the first match of a pattern in a text buffer."""

    start: int
    end: int

    def slice(self, text: str, strip_left: int = 0, strip_right: int = 0) -> str:
        """Return the matched text, dropping anchor characters at either end."""
        return text[self.start + strip_left:self.end - strip_right]


def find(pattern: Union[str, Pattern[str]], text: str, field: str = "") -> PatternMatch:
    """
    Locate the first leftmost match of ``pattern`` in ``text``.

    Args:
        pattern: Regular expression (string or compiled)
        text: Text buffer to search
        field: Field name reported if nothing matches

    Returns:
        PatternMatch with start/end offsets into ``text``

    Raises:
        PatternNotFound: If the pattern does not occur
    """
    if isinstance(pattern, str):
        pattern = re.compile(pattern)

    match = pattern.search(text)
    if match is None:
        raise PatternNotFound(field or pattern.pattern)

    return PatternMatch(start=match.start(), end=match.end())


def extract(
    pattern: Union[str, Pattern[str]],
    text: str,
    field: str,
    strip: tuple[int, int] = (0, 0),
) -> str:
    """Find ``pattern`` in ``text`` and return the matched substring."""
    span = find(pattern, text, field)
    return span.slice(text, strip[0], strip[1])


def contains(pattern: Union[str, Pattern[str]], text: str) -> bool:
    """Return True if ``pattern`` occurs anywhere in ``text``."""
    try:
        find(pattern, text)
    except PatternNotFound:
        return False
    return True
