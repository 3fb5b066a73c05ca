"""
Netflex API Client.

This module provides a client for the Netflex REST API. It is used to
read foundation data (variables, static content) and to submit wallet
passes to the signing endpoint.

HTTP and transport errors are logged and then re-raised unchanged.
"""
import logging
import os
import threading
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)


class NetflexAPIClient:
    """
    Client for the Netflex API.

    Requests are authenticated with HTTP basic auth using the site's
    public key as username and private key as password.

    Attributes:
        api_url: Base URL of the Netflex API (e.g., https://api.netflexapp.com/v1)
        public_key: Netflex public API key
        timeout: Request timeout in seconds
    """

    DEFAULT_API_URL = "https://api.netflexapp.com/v1"
    DEFAULT_TIMEOUT = 30

    def __init__(
        self,
        public_key: Optional[str],
        private_key: Optional[str],
        api_url: str = DEFAULT_API_URL,
        timeout: int = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize the Netflex API client.

        Args:
            public_key: Netflex public API key
            private_key: Netflex private API key
            api_url: Base URL of the API
            timeout: Request timeout in seconds
            session: Optional pre-built requests session (mostly for tests)
        """
        self.api_url = api_url.rstrip('/')
        self.public_key = public_key
        self.timeout = timeout
        self.session = session or requests.Session()

        if public_key and private_key:
            self.session.auth = (public_key, private_key)
            logger.info(f"NetflexAPIClient initialized for {self.api_url}")
        else:
            logger.warning("NetflexAPIClient initialized without credentials - requests will be unauthenticated")

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "NetflexAPIClient":
        """
        Create a NetflexAPIClient from configuration dictionary.

        Keys are resolved in order: inline value, Docker secret file,
        NETFLEX_PUBLIC_KEY / NETFLEX_PRIVATE_KEY environment variables.

        Args:
            config: Configuration dictionary with a netflex section

        Returns:
            Configured NetflexAPIClient instance
        """
        from config import read_secret_file

        netflex_config = config.get("netflex", {})

        public_key = netflex_config.get("public_key")
        if not public_key and netflex_config.get("public_key_file"):
            public_key = read_secret_file(netflex_config["public_key_file"])
        if not public_key:
            public_key = os.environ.get("NETFLEX_PUBLIC_KEY")

        private_key = netflex_config.get("private_key")
        if not private_key and netflex_config.get("private_key_file"):
            private_key = read_secret_file(netflex_config["private_key_file"])
        if not private_key:
            private_key = os.environ.get("NETFLEX_PRIVATE_KEY")

        return cls(
            public_key=public_key,
            private_key=private_key,
            api_url=netflex_config.get("url", cls.DEFAULT_API_URL),
            timeout=netflex_config.get("timeout", cls.DEFAULT_TIMEOUT)
        )

    def _build_url(self, path: str) -> str:
        """Build full API URL for a path."""
        return f"{self.api_url}/{path.lstrip('/')}"

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        url = self._build_url(path)
        logger.debug(f"Netflex API {method} {url}")

        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
        except requests.exceptions.Timeout:
            logger.error(f"Timeout requesting Netflex API: {method} {url}")
            raise
        except requests.exceptions.HTTPError as e:
            logger.error(f"HTTP error from Netflex API: {e}")
            raise
        except requests.exceptions.RequestException as e:
            logger.error(f"Request error from Netflex API: {e}")
            raise

        return response

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        GET a path and return the decoded JSON body.

        Args:
            path: API path relative to the base URL (e.g., "foundation/variables")
            params: Optional query parameters

        Returns:
            Decoded JSON response

        Raises:
            requests.exceptions.RequestException: On transport or HTTP errors
        """
        return self._request("GET", path, params=params).json()

    def post(self, path: str, json: Optional[Any] = None) -> Any:
        """POST a JSON body and return the decoded JSON response."""
        return self._request("POST", path, json=json).json()

    def post_raw(self, path: str, json: Optional[Any] = None) -> bytes:
        """POST a JSON body and return the raw response bytes.

        Used for endpoints that answer with binary content, such as the
        wallet pass signer.
        """
        return self._request("POST", path, json=json).content

    def close(self) -> None:
        self.session.close()


_default_client: Optional[NetflexAPIClient] = None
_default_client_lock = threading.Lock()


def get_client() -> NetflexAPIClient:
    """Return the process-wide API client, building it from config.yml on first use."""
    global _default_client
    with _default_client_lock:
        if _default_client is None:
            from config import load_config
            _default_client = NetflexAPIClient.from_config(load_config())
        return _default_client


def set_client(client: Optional[NetflexAPIClient]) -> None:
    """Replace the process-wide API client (None rebuilds it on next use)."""
    global _default_client
    with _default_client_lock:
        _default_client = client
