# SPDX-License-Identifier: Apache-2.0
# Copyright (C) 2024-2026 The Birthmark Standard Foundation

"""
Client for the HIP certificate daemon.

The daemon holds the host identity private keys. It signs SPKI statements,
verifies SPKI certificates on request, and issues and verifies X.509
certificates.
"""

import logging
from typing import Any, Optional

import httpx
from pydantic import BaseModel, ValidationError

from .config import settings
from .types import CertificateRecord, HitLike, VerificationStatus, hit_to_text
from .types.messages import (
    CertSpkiInfo,
    SpkiResponse,
    X509Request,
    X509ResponseEnvelope,
    X509VerificationRequest,
)


logger = logging.getLogger(__name__)

SPKI_SIGN_PATH = "/cert/spki/sign"
SPKI_VERIFY_PATH = "/cert/spki/verify"
X509_SIGN_PATH = "/cert/x509/sign"
X509_VERIFY_PATH = "/cert/x509/verify"


class DaemonError(Exception):
    """The certificate daemon could not be reached or gave a bad answer."""


class DaemonClient:
    """Client for certificate requests to the HIP daemon."""

    def __init__(
        self,
        endpoint: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize daemon client.

        Args:
            endpoint: Daemon base URL (defaults to config)
            timeout: Request timeout in seconds (defaults to config)
            transport: Custom httpx transport
        """
        self.endpoint = (endpoint or settings.daemon_endpoint).rstrip("/")
        self.timeout = timeout or settings.request_timeout
        self.transport = transport

    def _post(self, path: str, payload: BaseModel) -> dict[str, Any]:
        url = self.endpoint + path
        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.post(url, json=payload.model_dump())
                response.raise_for_status()
                return response.json()

        except httpx.TimeoutException as e:
            logger.error(f"Certificate daemon timeout after {self.timeout}s ({path})")
            raise DaemonError(f"Daemon request timed out: {path}") from e

        except httpx.HTTPError as e:
            logger.error(f"Certificate daemon HTTP error ({path}): {e}")
            raise DaemonError(f"Daemon HTTP error: {e}") from e

        except ValueError as e:
            logger.error(f"Certificate daemon sent invalid JSON ({path}): {e}")
            raise DaemonError(f"Invalid daemon response: {e}") from e

    def _spki_request(self, path: str, record: CertificateRecord) -> tuple[CertSpkiInfo, int]:
        data = self._post(path, CertSpkiInfo.from_record(record))
        try:
            answer = SpkiResponse.model_validate(data)
        except ValidationError as e:
            raise DaemonError(f"Invalid daemon response: {e}") from e

        if answer.cert_spki_info is None:
            raise DaemonError("No cert_spki_info found in daemon response")
        return answer.cert_spki_info, answer.error

    def sign_spki(self, record: CertificateRecord) -> CertificateRecord:
        """
        Ask the daemon to sign the statement in ``record``.

        Returns:
            New record with public_key and signature sequences filled in

        Raises:
            DaemonError: If the request fails or the daemon reports an error
        """
        logger.debug("Sending request to sign SPKI cert sequence to daemon")
        info, error = self._spki_request(SPKI_SIGN_PATH, record)
        if error:
            raise DaemonError(f"Daemon failed to sign cert sequence (error {error})")
        return info.to_record()

    def verify_spki(self, record: CertificateRecord) -> CertificateRecord:
        """
        Ask the daemon to verify a decoded certificate.

        Returns:
            Record with verified set from the daemon's answer
        """
        logger.debug("Sending request to verify SPKI cert to daemon")
        info, error = self._spki_request(SPKI_VERIFY_PATH, record)
        success = error == 0 and info.success == 0
        status = VerificationStatus.SUCCESS if success else VerificationStatus.FAILURE
        return info.to_record(verified=status)

    def request_x509_certificate(self, subject: HitLike) -> bytes:
        """
        Ask the daemon to issue an X.509 certificate for ``subject``.

        Returns:
            DER-encoded certificate
        """
        logger.debug("Sending request to sign x509 cert to daemon")
        data = self._post(X509_SIGN_PATH, X509Request(subject=hit_to_text(subject)))
        try:
            answer = X509ResponseEnvelope.model_validate(data)
        except ValidationError as e:
            raise DaemonError(f"Invalid daemon response: {e}") from e

        if answer.cert_x509_resp is None or not answer.cert_x509_resp.der:
            raise DaemonError("No x509 certificate found in daemon response")
        try:
            return answer.cert_x509_resp.get_der_bytes()
        except ValueError as e:
            raise DaemonError(f"Invalid DER encoding in daemon response: {e}") from e

    def request_x509_verification(self, certificate_pem: str) -> bool:
        """
        Ask the daemon to verify a PEM-encoded X.509 certificate.

        Returns:
            True if the daemon verified the certificate
        """
        logger.debug("Sending request to verify x509 cert to daemon")
        data = self._post(X509_VERIFY_PATH, X509VerificationRequest(certificate=certificate_pem))
        try:
            answer = X509ResponseEnvelope.model_validate(data)
        except ValidationError as e:
            raise DaemonError(f"Invalid daemon response: {e}") from e

        if answer.cert_x509_resp is None:
            raise DaemonError("No x509 response found in daemon answer")

        if answer.error == 0:
            logger.debug("Verified successfully")
            return True
        logger.debug("Verification failed")
        return False
