"""
================================================================================
JSON API Client with Allure Integration
================================================================================

A minimal HTTP client for JSON API smoke tests:
    - One GET per call, JSON body decoded into plain lists / dicts
    - No retry, no authentication, httpx default timeout
    - Transport and decode errors propagate unmodified
    - Allure reporting with cURL command generation

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

import allure
import httpx
from allure_commons.types import AttachmentType
from httpx import TransportError

from searchsuites.common.config_loader import RunSettings
from searchsuites.common.log_setup import get_logger


# Maximum response length to include in Allure reports
MAX_RESPONSE_LENGTH = 3000


class ApiClientError(Exception):
    """Raised when the client is used outside its context manager."""
    pass


class ApiClient:
    """
    JSON API client.

    Usage:
        >>> with ApiClient() as client:
        ...     posts = client.get_json(client.settings.posts_uri)
        ...     posts[0]["title"]
    """

    def __init__(
        self,
        settings: Optional[RunSettings] = None,
        log=None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        """
        Initialize API client.

        Args:
            settings: Run settings. Loaded from configuration if None.
            log: Bound logger. Defaults to the shared harness logger.
            transport: Optional httpx transport (e.g. httpx.MockTransport)
        """
        self.settings = settings or RunSettings.from_config()
        self.log = log or get_logger(type(self).__name__)
        self.transport = transport
        self.session: Optional[httpx.Client] = None

    def __enter__(self) -> "ApiClient":
        """Enter context manager - initialize HTTP session."""
        self.session = httpx.Client(transport=self.transport)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit context manager - close HTTP session."""
        if self.session:
            self.session.close()
            self.session = None

    def get_json(self, uri: str) -> Any:
        """
        GET `uri` and decode the JSON body.

        Returns:
            Decoded body (list, dict or scalar)

        Raises:
            httpx.TransportError: On network failure
            json.JSONDecodeError: If the body is not JSON
        """
        if self.session is None:
            raise ApiClientError(
                "ApiClient must be used within a context manager. "
                "Use 'with ApiClient() as client:'"
            )

        self.log.info(f"for '{uri}' started.")
        response = self.session.get(uri)
        self._log_to_allure("GET", uri, response)

        if response.status_code >= 400:
            self.log.warning(f"GET {uri} returned {response.status_code}")
        return response.json()

    def _log_to_allure(
        self,
        method: str,
        url: str,
        response: httpx.Response,
    ) -> None:
        """
        Log HTTP request/response to Allure report.

        Attaches:
            - Request URL
            - Request headers (sensitive values masked)
            - cURL command for reproduction
            - Response status
            - Response body (truncated if too long)
        """
        status_mark = "PASS" if response.status_code < 400 else "FAIL"
        step_title = f"[{status_mark}] {method} {url} -> {response.status_code}"

        with allure.step(step_title):
            allure.attach(
                url,
                name="Request URL",
                attachment_type=AttachmentType.TEXT
            )

            safe_headers = self._redact_headers(dict(response.request.headers))
            if safe_headers:
                allure.attach(
                    json.dumps(safe_headers, ensure_ascii=False, indent=2),
                    name="Request Headers",
                    attachment_type=AttachmentType.JSON
                )

            allure.attach(
                self._build_curl(method, url, safe_headers),
                name="cURL Command",
                attachment_type=AttachmentType.TEXT
            )

            allure.attach(
                f"{status_mark} {response.status_code}",
                name="Response Status",
                attachment_type=AttachmentType.TEXT
            )

            response_content = response.text or "<empty>"
            if len(response_content) > MAX_RESPONSE_LENGTH:
                response_content = (
                    f"{response_content[:MAX_RESPONSE_LENGTH]}\n\n"
                    f"... [Truncated, full length: {len(response_content)} chars] ..."
                )

            allure.attach(
                response_content,
                name="Response Body",
                attachment_type=AttachmentType.TEXT
            )

    def _redact_headers(self, headers: Dict[str, Any]) -> Dict[str, Any]:
        """
        Mask sensitive header values before logging.
        """
        sensitive_keys = {"authorization", "x-api-key", "cookie", "set-cookie"}
        masked = {}
        for key, value in headers.items():
            if key.lower() in sensitive_keys:
                masked[key] = "***MASKED***"
            else:
                masked[key] = value
        return masked

    def _build_curl(self, method: str, url: str, headers: Dict[str, str]) -> str:
        """Build a copy-paste ready cURL command for the request."""
        parts = [f"curl -X {method}"]
        for key, value in headers.items():
            parts.append(f"-H '{key}: {value}'")
        parts.append(f"'{url}'")
        return " \\\n  ".join(parts)


def get_json(uri: str, settings: Optional[RunSettings] = None) -> Any:
    """
    One-shot GET returning the decoded JSON body.

    Usage:
        posts = get_json("https://jsonplaceholder.typicode.com/posts")
    """
    with ApiClient(settings=settings) as client:
        return client.get_json(uri)


__all__ = [
    "ApiClient",
    "ApiClientError",
    "TransportError",
    "get_json",
]
