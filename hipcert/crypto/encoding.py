# SPDX-License-Identifier: Apache-2.0
# Copyright (C) 2024-2026 The Birthmark Standard Foundation

"""
Base64 and integer helpers for the fields embedded in SPKI text.
"""

import base64


def b64decode(data: str) -> bytes:
    """
    Strictly decode a base64 field.

    Raises:
        ValueError: If the text contains characters outside the base64
            alphabet or has bad padding
    """
    return base64.b64decode(data, validate=True)


def b64encode(data: bytes) -> str:
    """Encode bytes as a base64 field."""
    return base64.b64encode(data).decode("ascii")


def decode_block(data: str) -> bytes:
    """
    Decode base64 the way a block decoder does.

    Every 4 input characters produce exactly 3 output bytes. Padding
    characters decode as zero bytes instead of being dropped, so the result
    length is always ``len(data) // 4 * 3``.

    Args:
        data: Base64 text (surrounding whitespace is ignored)

    Returns:
        Decoded bytes including zero bytes for the padding positions

    Raises:
        ValueError: If the length is not a multiple of 4 or the text is not
            valid base64
    """
    stripped = data.strip()
    if len(stripped) % 4 != 0:
        raise ValueError(f"Base64 block length {len(stripped)} is not a multiple of 4")

    padding = len(stripped) - len(stripped.rstrip("="))
    if padding > 2:
        raise ValueError("Too much base64 padding")

    return b64decode(stripped) + b"\x00" * padding


def int_from_bytes(data: bytes) -> int:
    """Interpret bytes as a big-endian unsigned integer."""
    return int.from_bytes(data, "big")


def int_to_bytes(value: int, length: int = 0) -> bytes:
    """Big-endian encoding of ``value``, left-padded to ``length`` bytes."""
    size = max(length, (value.bit_length() + 7) // 8, 1)
    return value.to_bytes(size, "big")
