# SPDX-License-Identifier: Apache-2.0
# Copyright (C) 2024-2026 The Birthmark Standard Foundation

"""
Tests for the certificate daemon client.

The daemon is replaced by an httpx.MockTransport handler.
"""

import base64
import json

import httpx
import pytest

from hipcert.client import (
    SPKI_SIGN_PATH,
    SPKI_VERIFY_PATH,
    X509_SIGN_PATH,
    X509_VERIFY_PATH,
    DaemonClient,
    DaemonError,
)
from hipcert.spki import CertificateBuilder, SignatureVerifier
from hipcert.types import CertificateRecord, VerificationStatus, hit_to_bytes

from conftest import ISSUER_HIT, SUBJECT_HIT, sign_rsa


ENDPOINT = "http://daemon.test"


def make_client(handler) -> DaemonClient:
    return DaemonClient(endpoint=ENDPOINT, timeout=1.0, transport=httpx.MockTransport(handler))


class TestSpkiRequests:
    """Test SPKI sign and verify requests."""

    def test_sign(self, rsa_key, unsigned_record):
        """Test that the signed sequences come back in a new record."""
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            body = json.loads(request.content)
            seen["body"] = body
            signed = sign_rsa(rsa_key, unsigned_record)
            return httpx.Response(200, json={
                "cert_spki_info": {
                    "public_key": signed.public_key,
                    "cert": body["cert"],
                    "signature": signed.signature,
                    "issuer_hit": body["issuer_hit"],
                },
                "error": 0,
            })

        record = make_client(handler).sign_spki(unsigned_record)

        assert seen["path"] == SPKI_SIGN_PATH
        assert seen["body"]["cert"] == unsigned_record.statement
        assert seen["body"]["issuer_hit"] == ISSUER_HIT
        assert record.is_signed
        assert record.statement == unsigned_record.statement
        assert record.issuer_identity == hit_to_bytes(ISSUER_HIT)
        assert SignatureVerifier().verify(record).valid

    def test_sign_as_builder_signer(self, rsa_key):
        def handler(request):
            body = json.loads(request.content)
            signed = sign_rsa(rsa_key, CertificateRecord(statement=body["cert"]))
            return httpx.Response(200, json={
                "cert_spki_info": {
                    "public_key": signed.public_key,
                    "cert": body["cert"],
                    "signature": signed.signature,
                    "issuer_hit": body["issuer_hit"],
                },
            })

        builder = CertificateBuilder(signer=make_client(handler).sign_spki)

        record = builder.create(ISSUER_HIT, SUBJECT_HIT)

        assert record.is_signed
        assert SignatureVerifier().verify(record).valid

    def test_sign_daemon_error(self, unsigned_record):
        def handler(request):
            return httpx.Response(200, json={"cert_spki_info": {}, "error": 1})

        with pytest.raises(DaemonError, match="failed to sign"):
            make_client(handler).sign_spki(unsigned_record)

    @pytest.mark.parametrize("error, success, expected", [
        (0, 0, VerificationStatus.SUCCESS),
        (0, -1, VerificationStatus.FAILURE),
        (1, 0, VerificationStatus.FAILURE),
    ])
    def test_verify(self, rsa_record, error, success, expected):
        def handler(request):
            assert request.url.path == SPKI_VERIFY_PATH
            body = json.loads(request.content)
            body["success"] = success
            return httpx.Response(200, json={"cert_spki_info": body, "error": error})

        record = make_client(handler).verify_spki(rsa_record)

        assert record.verified is expected
        assert record.statement == rsa_record.statement

    def test_missing_info(self, rsa_record):
        def handler(request):
            return httpx.Response(200, json={"error": 0})

        with pytest.raises(DaemonError, match="No cert_spki_info"):
            make_client(handler).verify_spki(rsa_record)


class TestTransportErrors:
    """Test transport and protocol failures."""

    def test_http_error_status(self, rsa_record):
        def handler(request):
            return httpx.Response(500, text="internal error")

        with pytest.raises(DaemonError, match="HTTP error"):
            make_client(handler).verify_spki(rsa_record)

    def test_timeout(self, rsa_record):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(DaemonError, match="timed out"):
            make_client(handler).verify_spki(rsa_record)

    def test_connection_refused(self, rsa_record):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(DaemonError):
            make_client(handler).verify_spki(rsa_record)

    def test_invalid_json(self, rsa_record):
        def handler(request):
            return httpx.Response(200, text="not json")

        with pytest.raises(DaemonError, match="Invalid daemon response"):
            make_client(handler).verify_spki(rsa_record)


class TestX509Requests:
    """Test X.509 issuance and verification requests."""

    def test_request_certificate(self):
        der = b"\x30\x82\x01\x0a"

        def handler(request):
            assert request.url.path == X509_SIGN_PATH
            assert json.loads(request.content) == {"subject": SUBJECT_HIT}
            return httpx.Response(200, json={
                "cert_x509_resp": {"der": base64.b64encode(der).decode("ascii")},
                "error": 0,
            })

        assert make_client(handler).request_x509_certificate(SUBJECT_HIT) == der

    def test_request_certificate_empty(self):
        def handler(request):
            return httpx.Response(200, json={"cert_x509_resp": {"der": ""}})

        with pytest.raises(DaemonError, match="No x509 certificate"):
            make_client(handler).request_x509_certificate(SUBJECT_HIT)

    @pytest.mark.parametrize("error, expected", [(0, True), (1, False)])
    def test_request_verification(self, error, expected):
        def handler(request):
            assert request.url.path == X509_VERIFY_PATH
            assert json.loads(request.content)["certificate"].startswith("-----BEGIN")
            return httpx.Response(200, json={"cert_x509_resp": {}, "error": error})

        pem = "-----BEGIN CERTIFICATE-----\nMIIB\n-----END CERTIFICATE-----\n"

        assert make_client(handler).request_x509_verification(pem) is expected

    def test_request_verification_missing_response(self):
        def handler(request):
            return httpx.Response(200, json={"error": 0})

        with pytest.raises(DaemonError, match="No x509 response"):
            make_client(handler).request_x509_verification("-----BEGIN CERTIFICATE-----")
