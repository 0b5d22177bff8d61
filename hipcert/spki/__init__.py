# SPDX-License-Identifier: Apache-2.0
# Copyright (C) 2024-2026 The Birthmark Standard Foundation

"""
hipcert SPKI Certificate Utilities

Building, decoding and verification of the text-encoded SPKI certificates
exchanged by HIP hosts.
"""

from .errors import (
    AnchorNotFound,
    CertificateError,
    CertificateExpired,
    DigestMismatch,
    MalformedBase64,
    MalformedStatement,
    OversizedInput,
    PatternNotFound,
    PrimitiveError,
    PublicKeyNotFound,
    SignatureInvalid,
    SignatureNotFound,
    StatementNotFound,
    UnsupportedAlgorithm,
)

from .patterns import (
    PatternMatch,
    extract,
    find,
)

from .keys import (
    Algorithm,
    DSAKeyMaterial,
    RSAKeyMaterial,
    decode_dsa,
    decode_rsa,
    detect_algorithm,
)

from .decoder import (
    CertificateDecoder,
    Principal,
    StatementFields,
    decode,
    parse_statement,
)

from .builder import (
    CertificateBuilder,
    assemble,
    build_skeleton,
    inject,
)

from .verifier import (
    SignatureVerifier,
    VerificationResult,
    verify,
)

__all__ = [
    # Errors
    "AnchorNotFound",
    "CertificateError",
    "CertificateExpired",
    "DigestMismatch",
    "MalformedBase64",
    "MalformedStatement",
    "OversizedInput",
    "PatternNotFound",
    "PrimitiveError",
    "PublicKeyNotFound",
    "SignatureInvalid",
    "SignatureNotFound",
    "StatementNotFound",
    "UnsupportedAlgorithm",
    # Patterns
    "PatternMatch",
    "extract",
    "find",
    # Key material
    "Algorithm",
    "DSAKeyMaterial",
    "RSAKeyMaterial",
    "decode_dsa",
    "decode_rsa",
    "detect_algorithm",
    # Decoding
    "CertificateDecoder",
    "Principal",
    "StatementFields",
    "decode",
    "parse_statement",
    # Building
    "CertificateBuilder",
    "assemble",
    "build_skeleton",
    "inject",
    # Verification
    "SignatureVerifier",
    "VerificationResult",
    "verify",
]
