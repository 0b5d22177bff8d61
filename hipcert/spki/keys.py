# SPDX-License-Identifier: Apache-2.0
# Copyright (C) 2024-2026 The Birthmark Standard Foundation

"""
Public-key algorithm detection and key material decoding.

Public-key sequences produced by the certificate daemon look like:

    (public_key (rsa-pkcs1-sha1 (e #010001#)(n |<base64 modulus>|)))
    (public_key (dsa-pkcs1-sha1 (p |..|)(q |..|)(g |..|)(y |..|)))
"""

import binascii
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Union

from cryptography.hazmat.primitives.asymmetric import dsa, rsa

from ..crypto import b64decode, decode_block, int_from_bytes, int_to_bytes
from . import patterns
from .errors import MalformedBase64, PatternNotFound, UnsupportedAlgorithm


logger = logging.getLogger(__name__)


class Algorithm(str, Enum):
    """Public-key algorithm named by the tag inside the public-key sequence."""

    RSA = "rsa-pkcs1-sha1"
    DSA = "dsa-pkcs1-sha1"
    ECDSA = "ecdsa"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class RSAKeyMaterial:
    """Big-endian RSA modulus and public exponent."""

    modulus: bytes
    exponent: bytes

    @property
    def n(self) -> int:
        return int_from_bytes(self.modulus)

    @property
    def e(self) -> int:
        return int_from_bytes(self.exponent)

    @property
    def key_size(self) -> int:
        """Modulus length in bytes."""
        return len(self.modulus)

    def to_public_key(self) -> rsa.RSAPublicKey:
        return rsa.RSAPublicNumbers(self.e, self.n).public_key()


@dataclass(frozen=True)
class DSAKeyMaterial:
    """Big-endian DSA domain parameters and public value."""

    p: bytes
    q: bytes
    g: bytes
    y: bytes

    def to_public_key(self) -> dsa.DSAPublicKey:
        parameters = dsa.DSAParameterNumbers(
            p=int_from_bytes(self.p),
            q=int_from_bytes(self.q),
            g=int_from_bytes(self.g),
        )
        return dsa.DSAPublicNumbers(int_from_bytes(self.y), parameters).public_key()


KeyMaterial = Union[RSAKeyMaterial, DSAKeyMaterial]


def detect_algorithm(public_key_text: str) -> Algorithm:
    """
    Work out which algorithm a public-key sequence uses.

    DSA is tested first, then RSA. An ECDSA tag is recognized so callers can
    reject it explicitly; anything else is UNKNOWN.
    """
    if patterns.contains(patterns.DSA_TAG, public_key_text):
        logger.debug("Public-key is DSA")
        return Algorithm.DSA
    if patterns.contains(patterns.RSA_TAG, public_key_text):
        logger.debug("Public-key is RSA")
        return Algorithm.RSA
    if patterns.contains(patterns.ECDSA_TAG, public_key_text):
        logger.debug("Public-key is ECDSA")
        return Algorithm.ECDSA
    logger.debug("Unknown public-key algorithm")
    return Algorithm.UNKNOWN


def normalize_modulus_length(length: int) -> int:
    """
    Trim a block-decoded modulus length.

    Block decoding yields a multiple of 3 bytes, padding included. When that
    is not a multiple of 4, one byte is dropped and the result is rounded
    down to an even length. 129 -> 128, 258 -> 256, 384 -> 384.
    """
    if length % 4 != 0:
        length -= 1
        length -= length % 2
    return length


def _pipe_field(pattern, text: str, field: str, strip_left: int = 1) -> bytes:
    encoded = patterns.extract(pattern, text, field, strip=(strip_left, 1))
    try:
        return b64decode(encoded)
    except (binascii.Error, ValueError) as e:
        raise MalformedBase64(field, str(e)) from e


def decode_rsa(public_key_text: str) -> RSAKeyMaterial:
    """
    Extract the RSA exponent and modulus from a public-key sequence.

    Raises:
        PatternNotFound: If the exponent or modulus field is missing
        MalformedBase64: If the modulus is not valid base64
    """
    exponent_hex = patterns.extract(
        patterns.RSA_EXPONENT, public_key_text, "exponent", strip=(1, 1)
    )
    if not exponent_hex:
        raise PatternNotFound("exponent", "RSA exponent is empty")
    exponent = int_to_bytes(int(exponent_hex, 16))

    modulus_b64 = patterns.extract(
        patterns.RSA_MODULUS, public_key_text, "modulus", strip=(1, 1)
    )
    try:
        decoded = decode_block(modulus_b64)
    except (binascii.Error, ValueError) as e:
        raise MalformedBase64("modulus", str(e)) from e

    keylen = normalize_modulus_length(len(decoded))
    logger.debug(f"RSA modulus decoded to {len(decoded)} bytes, using {keylen}")

    return RSAKeyMaterial(modulus=decoded[:keylen], exponent=exponent)


def decode_dsa(public_key_text: str) -> DSAKeyMaterial:
    """
    Extract DSA p, q, g and y (in that order) from a public-key sequence.

    Raises:
        PatternNotFound: If one of the four fields is missing
        MalformedBase64: If a field is not valid base64
    """
    # "(p |" is four characters of anchor before the base64 starts
    p = _pipe_field(patterns.DSA_P, public_key_text, "p", strip_left=4)
    q = _pipe_field(patterns.DSA_Q, public_key_text, "q", strip_left=4)
    g = _pipe_field(patterns.DSA_G, public_key_text, "g", strip_left=4)
    y = _pipe_field(patterns.DSA_Y, public_key_text, "y", strip_left=4)

    logger.debug(
        f"DSA key material: p={len(p)} q={len(q)} g={len(g)} y={len(y)} bytes"
    )
    return DSAKeyMaterial(p=p, q=q, g=g, y=y)


def decode_key_material(public_key_text: str) -> tuple[Algorithm, KeyMaterial]:
    """
    Detect the algorithm and decode the matching key material.

    Raises:
        UnsupportedAlgorithm: For ECDSA (recognized) or an unknown tag
    """
    algorithm = detect_algorithm(public_key_text)

    if algorithm is Algorithm.RSA:
        return algorithm, decode_rsa(public_key_text)
    if algorithm is Algorithm.DSA:
        return algorithm, decode_dsa(public_key_text)
    if algorithm is Algorithm.ECDSA:
        raise UnsupportedAlgorithm(algorithm.value, recognized=True)
    raise UnsupportedAlgorithm(algorithm.value)
