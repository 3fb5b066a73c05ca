"""
Pass Signing Submission.

Passes are signed by the Netflex wallet service, which holds the pass type
certificate. This module sends the built pass to that service and wraps
the signed .pkpass bytes in a Flask response.

Wire format (POST foundation/wallet/pkpass):
    {
      "data":  {...pass.json payload...},
      "files": [{"name": "icon.png", "path": "https://..." | "data:...", "locale"?: "nb"}],
      "i18n":  {"nb": {"GATE": "Utgang"}}
    }
"""
import logging
import time
from typing import TYPE_CHECKING, Any, Mapping, Optional

from flask import Response

from netflex import NetflexAPIClient, get_client

if TYPE_CHECKING:
    from .pkpass import PKPass

logger = logging.getLogger(__name__)

PKPASS_MIME_TYPE = "application/vnd.apple.pkpass"
SIGNING_PATH = "foundation/wallet/pkpass"


class PassSigningClient:
    """Submits passes to the Netflex signing endpoint.

    Attributes:
        api: Netflex API client used for the request. Defaults to the
             process-wide client when not given.
    """

    def __init__(self, api: Optional[NetflexAPIClient] = None):
        self._api = api

    @property
    def api(self) -> NetflexAPIClient:
        return self._api or get_client()

    def submit(self, pkpass: "PKPass") -> bytes:
        """Send a pass for signing and return the signed .pkpass bytes.

        Raises:
            requests.exceptions.RequestException: On transport or HTTP errors.
                There are no retries.
        """
        envelope = pkpass.to_envelope()
        logger.info(
            f"Submitting {pkpass.type.value} pass {envelope['data'].get('serialNumber')} "
            f"with {len(envelope['files'])} file(s) for signing"
        )
        return self.api.post_raw(SIGNING_PATH, json=envelope)

    def to_response(self, pkpass: "PKPass", headers: Optional[Mapping[str, Any]] = None) -> Response:
        """Sign a pass and wrap it in a Flask response.

        Args:
            pkpass: Pass to sign
            headers: Extra headers to carry on the response (e.g., Content-Disposition)

        Returns:
            200 response with the pass body, the pkpass content type and
            X-SSR / X-SSR-Rendered-In timing headers
        """
        started = time.perf_counter()
        content = self.submit(pkpass)
        elapsed = time.perf_counter() - started

        response = Response(content, status=200, headers=dict(headers or {}))
        response.headers["Content-Type"] = PKPASS_MIME_TYPE
        response.headers["X-SSR"] = "1"
        response.headers["X-SSR-Rendered-In"] = f"{elapsed}s"

        logger.debug(f"Signed pass rendered in {elapsed:.3f}s ({len(content)} bytes)")
        return response
