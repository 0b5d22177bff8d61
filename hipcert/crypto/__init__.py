# SPDX-License-Identifier: Apache-2.0
# Copyright (C) 2024-2026 The Birthmark Standard Foundation

"""
hipcert - Cryptographic Utilities

Digest and encoding helpers shared by the SPKI codec and verifier:
- SHA-1 digests of cert sequences
- Strict and block-mode base64 decoding of embedded fields
- Big-endian integer conversion for key material

Example Usage:
    >>> from hipcert.crypto import compute_statement_digest, b64encode
    >>>
    >>> digest = compute_statement_digest('(cert (issuer (hash hit 2001:10::1)))')
    >>> field = b64encode(digest)
"""

from .hashing import (
    SHA1_DIGEST_LENGTH,
    SIGNATURE_HASH,
    compute_sha1,
    compute_statement_digest,
    constant_time_compare,
)

from .encoding import (
    b64decode,
    b64encode,
    decode_block,
    int_from_bytes,
    int_to_bytes,
)

__all__ = [
    # Hashing
    "SHA1_DIGEST_LENGTH",
    "SIGNATURE_HASH",
    "compute_sha1",
    "compute_statement_digest",
    "constant_time_compare",
    # Encoding
    "b64decode",
    "b64encode",
    "decode_block",
    "int_from_bytes",
    "int_to_bytes",
]
