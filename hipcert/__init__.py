"""
hipcert - HIP Certificate Tools

Build, decode and verify the text-encoded SPKI certificates used by the Host
Identity Protocol, and talk to the certificate daemon for signing and X.509
issuance.

Modules:
    spki: SPKI certificate builder, decoder and verifier
    types: Core data structures (CertificateRecord, HIT helpers)
    crypto: Digest and encoding utilities
    certificates: X.509 loading and validation
    client: Certificate daemon client

Example:
    >>> from hipcert.spki import CertificateDecoder, SignatureVerifier
    >>>
    >>> record = CertificateDecoder().decode(blob)
    >>> result = SignatureVerifier().verify(record)
    >>> result.valid
    True
"""

__version__ = "0.1.0"

__all__ = [
    "spki",
    "types",
    "crypto",
    "certificates",
    "client",
]
