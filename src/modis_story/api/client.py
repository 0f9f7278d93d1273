"""
HTTP client for fetching the story's remote inputs.

Handles session management, retries and error handling.
"""

import logging
from typing import Any, Optional

import requests  # type: ignore
from requests.adapters import HTTPAdapter  # type: ignore
from urllib3.util.retry import Retry  # type: ignore


class HttpClient:
    """Retrying GET client for datasets and boundary files."""

    def __init__(
        self,
        timeout: int = 30,
        max_retries: int = 3,
        verify_ssl: bool = True,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize HTTP client.

        Args:
            timeout: Request timeout in seconds
            max_retries: Maximum number of retry attempts
            verify_ssl: Whether to verify SSL certificates
            logger: Logger instance
        """
        self.timeout = timeout
        self.verify_ssl = verify_ssl
        self.logger = logger or logging.getLogger(__name__)

        # Disable SSL warnings when verify_ssl is False
        if not verify_ssl:
            import urllib3
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

        # Setup session with retry strategy
        self.session = requests.Session()
        retry_strategy = Retry(
            total=max_retries,
            backoff_factor=1,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["GET"]
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

    def _get(self, url: str, accept: str) -> requests.Response:
        """
        Make GET request.

        Args:
            url: Absolute URL
            accept: Accept header value

        Returns:
            Response object

        Raises:
            requests.exceptions.RequestException: On request failure
        """
        self.logger.debug(f"GET {url}")

        try:
            response = self.session.request(
                method="GET",
                url=url,
                timeout=self.timeout,
                verify=self.verify_ssl,
                headers={"Accept": accept}
            )
            response.raise_for_status()
            return response

        except requests.exceptions.RequestException as e:
            self.logger.error(f"HTTP request failed: GET {url} - {e}")
            raise

    def get_json(self, url: str) -> Any:
        """
        Fetch and decode a JSON document.

        Raises:
            requests.exceptions.RequestException: On request failure
            ValueError: If the body is not valid JSON
        """
        return self._get(url, "application/json").json()

    def get_text(self, url: str) -> str:
        """
        Fetch a text document (e.g. CSV).

        Raises:
            requests.exceptions.RequestException: On request failure
        """
        response = self._get(url, "text/csv, text/plain, */*")
        if response.encoding is None:
            response.encoding = "utf-8"
        return response.text

    def close(self) -> None:
        """Close the session."""
        self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
