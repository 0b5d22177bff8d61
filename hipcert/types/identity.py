# SPDX-License-Identifier: Apache-2.0
# Copyright (C) 2024-2026 The Birthmark Standard Foundation

"""
Host Identity Tag (HIT) helpers.

A HIT is a 128-bit identity value. On the wire it appears in the standard
colon-hex IPv6 presentation form, e.g. ``2001:10:7f26:ab0e:1a3c:98bd:d3c0:1f5``.
"""

import ipaddress
from typing import Union


HIT_LENGTH = 16

HitLike = Union[bytes, str, ipaddress.IPv6Address]


def hit_to_address(value: HitLike) -> ipaddress.IPv6Address:
    """
    Normalize a HIT given as raw bytes, text or IPv6Address.

    Raises:
        ValueError: If the value is not a 128-bit identity
    """
    if isinstance(value, ipaddress.IPv6Address):
        return value
    if isinstance(value, (bytes, bytearray)):
        if len(value) != HIT_LENGTH:
            raise ValueError(
                f"Invalid HIT length: {len(value)} (expected {HIT_LENGTH})"
            )
        return ipaddress.IPv6Address(bytes(value))
    if isinstance(value, str):
        try:
            return ipaddress.IPv6Address(value)
        except ipaddress.AddressValueError as e:
            raise ValueError(f"Invalid HIT: {value}") from e
    raise ValueError(f"Unsupported HIT type: {type(value).__name__}")


def hit_to_bytes(value: HitLike) -> bytes:
    """Return the 16-byte binary form of a HIT."""
    return hit_to_address(value).packed


def hit_to_text(value: HitLike) -> str:
    """Return the colon-hex presentation form of a HIT."""
    return hit_to_address(value).compressed
