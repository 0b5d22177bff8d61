# SPDX-License-Identifier: Apache-2.0
# Copyright (C) 2024-2026 The Birthmark Standard Foundation

"""
hipcert X.509 Certificate Utilities

Loading and validation of the X.509 certificates the HIP daemon issues for
host identities.
"""

from .parser import (
    CertificateParser,
)

from .validator import (
    ValidationResult,
    X509Verifier,
)

__all__ = [
    # Parsers
    "CertificateParser",
    # Validators
    "ValidationResult",
    "X509Verifier",
]
