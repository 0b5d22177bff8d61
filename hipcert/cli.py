# SPDX-License-Identifier: Apache-2.0
# Copyright (C) 2024-2026 The Birthmark Standard Foundation

"""
Command line tool for SPKI certificates.

    hipcert build --issuer 2001:10::1 --subject 2001:10::2 [--sign]
    hipcert decode cert.txt
    hipcert verify cert.txt [--check-validity] [--daemon]
"""

import argparse
import logging
import sys
from datetime import datetime
from typing import Optional

from .client import DaemonClient, DaemonError
from .config import settings
from .spki import CertificateBuilder, CertificateDecoder, SignatureVerifier, parse_statement
from .types import VerificationStatus


logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def _parse_time(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid time: {value} (expected ISO 8601)")


def cmd_build(args: argparse.Namespace) -> int:
    signer = DaemonClient().sign_spki if args.sign else None
    builder = CertificateBuilder(signer=signer, identity_type=args.identity_type)

    if args.sign:
        record = builder.create(args.issuer, args.subject, args.not_before, args.not_after)
        print(record.to_blob())
    else:
        record = builder.build(args.issuer, args.subject, args.not_before, args.not_after)
        print(record.statement)
    return 0


def cmd_decode(args: argparse.Namespace) -> int:
    record = CertificateDecoder().decode(_read_input(args.file))
    fields = parse_statement(record.statement)

    print(f"public_key: {record.public_key}")
    print(f"cert:       {record.statement}")
    print(f"signature:  {record.signature}")
    if fields.issuer:
        print(f"issuer:     {fields.issuer.identity_type} {fields.issuer.identity}")
    if fields.subject:
        print(f"subject:    {fields.subject.identity_type} {fields.subject.identity}")
    if fields.not_before:
        print(f"not-before: {fields.not_before}")
    if fields.not_after:
        print(f"not-after:  {fields.not_after}")
    return 0


def cmd_verify(args: argparse.Namespace) -> int:
    record = CertificateDecoder().decode(_read_input(args.file))

    if args.daemon:
        record = DaemonClient().verify_spki(record)
        ok = record.verified is VerificationStatus.SUCCESS
        print("Verified successfully" if ok else "Verification failed")
        return 0 if ok else 1

    result = SignatureVerifier(check_validity=args.check_validity).verify(record)
    if result.valid:
        print(f"Verified successfully ({result.algorithm.value})")
        return 0
    print(f"Verification failed: {result.error_message}")
    return 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hipcert",
        description="Build, decode and verify HIP SPKI certificates"
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=settings.log_level,
        help=f"Logging level (default: {settings.log_level})"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    build = subparsers.add_parser("build", help="Build a cert sequence")
    build.add_argument("--issuer", required=True, help="Issuer HIT")
    build.add_argument("--subject", required=True, help="Subject HIT")
    build.add_argument("--not-before", type=_parse_time, help="Start of validity (default: now)")
    build.add_argument("--not-after", type=_parse_time, help="End of validity")
    build.add_argument(
        "--identity-type",
        default=settings.default_identity_type,
        help=f"Identity type (default: {settings.default_identity_type})"
    )
    build.add_argument(
        "--sign",
        action="store_true",
        help="Have the certificate daemon sign the statement and print the full blob"
    )
    build.set_defaults(func=cmd_build)

    decode = subparsers.add_parser("decode", help="Split a certificate into its sequences")
    decode.add_argument("file", help="Certificate file ('-' for stdin)")
    decode.set_defaults(func=cmd_decode)

    verify = subparsers.add_parser("verify", help="Verify a certificate signature")
    verify.add_argument("file", help="Certificate file ('-' for stdin)")
    verify.add_argument(
        "--check-validity",
        action="store_true",
        help="Also reject certificates outside their validity window"
    )
    verify.add_argument(
        "--daemon",
        action="store_true",
        help="Ask the certificate daemon to verify instead of verifying locally"
    )
    verify.set_defaults(func=cmd_verify)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    try:
        return args.func(args)
    except ValueError as e:
        logger.error(f"{args.command} failed: {e}")
        return 2
    except DaemonError as e:
        logger.error(f"Certificate daemon request failed: {e}")
        return 3
    except OSError as e:
        logger.error(f"Cannot read input: {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
