"""
REST client — fetches resources as raw JSON and sends commented patches.

Network failures are reported, not retried.
"""

from __future__ import annotations

import logging

import requests

from ..editing.patch import PatchComment
from ..errors import ApiError

logger = logging.getLogger(__name__)


class FlagApiClient:

    def __init__(self, base_url: str, api_token: str = "", timeout: float = 30.0):
        self.base_url = base_url.rstrip("/")
        self.api_token = api_token
        self.timeout = timeout

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _headers(self) -> dict:
        headers = {"Content-Type": "application/json"}
        if self.api_token:
            headers["Authorization"] = self.api_token
        return headers

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        url = self._url(path)
        logger.debug("[Api] %s %s", method, url)
        try:
            response = requests.request(method, url, headers=self._headers(),
                                        timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            raise ApiError(f"{method} {url} failed: {exc}") from exc

        if not response.ok:
            logger.warning("[Api] %s %s -> %d", method, url, response.status_code)
            raise ApiError(
                f"{method} {url} returned {response.status_code}: {response.text[:200]}",
                status_code=response.status_code,
            )
        return response

    def get_resource(self, path: str) -> bytes:
        """Return the resource at *path* as raw JSON bytes."""
        return self._request("GET", path).content

    def patch_resource(self, path: str, patch: PatchComment) -> dict:
        """Send *patch* to the resource at *path* and return the updated resource."""
        response = self._request("PATCH", path, json=patch.to_dict())
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(f"PATCH {self._url(path)} returned invalid JSON") from exc
