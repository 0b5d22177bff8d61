# SPDX-License-Identifier: Apache-2.0
# Copyright (C) 2024-2026 The Birthmark Standard Foundation

"""
Hashing utilities for SPKI certificates.

The HIP certificate suite signs a SHA-1 digest of the cert sequence. All
digest computations go through these functions so the algorithm is defined
in one place.
"""

import hashlib
import hmac

from cryptography.hazmat.primitives import hashes


SHA1_DIGEST_LENGTH = 20

# Hash algorithm object handed to cryptography for prehashed verification
SIGNATURE_HASH = hashes.SHA1()


def compute_sha1(data: bytes) -> bytes:
    """
    Compute the SHA-1 digest of raw bytes.

    Args:
        data: Bytes to hash (the exact statement text)

    Returns:
        20 bytes (160 bits) of hash output

    Example:
        >>> digest = compute_sha1(b'(cert (issuer ...))')
        >>> len(digest)
        20
    """
    return hashlib.sha1(data).digest()


def compute_statement_digest(statement: str) -> bytes:
    """Digest the statement text exactly as it appears on the wire."""
    return compute_sha1(statement.encode("utf-8"))


def constant_time_compare(a: bytes, b: bytes) -> bool:
    """Compare two byte strings without leaking where they differ."""
    return hmac.compare_digest(a, b)
