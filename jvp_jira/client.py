"""Minimal JIRA REST API client."""

from __future__ import annotations

import base64
import http.client
import json
import logging
import ssl
from dataclasses import dataclass
from typing import Any
from urllib import error, parse, request

from jvp_common.errors import RemoteServiceError


logger = logging.getLogger(__name__)


def _validate_http_url(url: str, label: str) -> str:
    parsed = parse.urlparse(url)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise ValueError(f"{label} must be an http(s) URL, got: {url}")
    return url


@dataclass
class JiraClient:
    """Read-only JIRA REST client. One attempt per call, no retries."""

    base_url: str
    username: str
    api_token: str
    timeout_seconds: float = 30.0
    verify_ssl: bool = True

    def __post_init__(self) -> None:
        self.base_url = _validate_http_url(self.base_url.rstrip("/"), "JIRA base_url")

    def get_project_versions(self, project_key: str) -> list[dict[str, Any]]:
        """Return the raw version objects of a project."""
        safe_key = parse.quote(project_key, safe="")
        data = self._get(f"/rest/api/2/project/{safe_key}/versions")
        if not isinstance(data, list):
            raise RemoteServiceError(
                "JIRA returned an unexpected versions payload",
                context={"project_key": project_key, "type": type(data).__name__},
            )
        return [item for item in data if isinstance(item, dict)]

    def _headers(self) -> dict[str, str]:
        token = base64.b64encode(
            f"{self.username}:{self.api_token}".encode("utf-8")
        ).decode("ascii")
        return {
            "Accept": "application/json",
            "Authorization": f"Basic {token}",
        }

    def _ssl_context(self) -> ssl.SSLContext | None:
        if self.verify_ssl:
            return None
        context = ssl.create_default_context()
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
        return context

    def _get(self, path: str) -> Any:
        url = f"{self.base_url}{path}"
        req = request.Request(url, headers=self._headers(), method="GET")
        logger.debug("GET %s", url)
        try:
            with request.urlopen(  # nosec B310
                req, timeout=self.timeout_seconds, context=self._ssl_context()
            ) as resp:
                status = resp.status
                raw = resp.read()
        except error.HTTPError as exc:
            body = exc.read().decode("utf-8", errors="replace") if exc.fp else ""
            message = f"JIRA API error {exc.code}"
            if body:
                message = f"{message}: {body}"
            raise RemoteServiceError(
                message,
                context={"url": url, "status": exc.code},
                cause=exc,
            ) from exc
        except (http.client.HTTPException, OSError) as exc:
            # URLError, timeouts, resets and dropped connections alike
            raise RemoteServiceError(
                f"JIRA API request failed: {exc}",
                context={"url": url},
                cause=exc,
            ) from exc
        if status != 200:
            raise RemoteServiceError(
                f"JIRA API error {status}",
                context={"url": url, "status": status},
            )
        return self._parse_json(raw, url)

    @staticmethod
    def _parse_json(raw: bytes, url: str) -> Any:
        try:
            return json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise RemoteServiceError(
                f"Invalid JSON from JIRA: {exc}",
                context={"url": url},
                cause=exc,
            ) from exc
