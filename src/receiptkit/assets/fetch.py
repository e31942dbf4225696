#!/usr/bin/env python3
# Copyright (C) 2026 Alex Stoyanov
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with this program.
# If not, see <https://www.gnu.org/licenses/>.

from __future__ import annotations

import base64
import logging
from dataclasses import dataclass
from typing import Final, Protocol

import httpx

from ..core.errors import AssetFetchError

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE: Final = "image/png"
DEFAULT_TIMEOUT_SECONDS: Final = 10.0

PLACEHOLDER_SVG: Final = (
    b'<svg xmlns="http://www.w3.org/2000/svg" width="120" height="40" viewBox="0 0 120 40">'
    b'<rect width="120" height="40" rx="6" fill="#e5e7eb"/>'
    b'<text x="60" y="26" font-family="Helvetica, Arial, sans-serif" font-size="16" '
    b'font-weight="700" fill="#6b7280" text-anchor="middle">LOGO</text>'
    b"</svg>"
)


@dataclass(frozen=True)
class Asset:
    data: bytes
    mime_type: str = DEFAULT_MIME_TYPE

    @property
    def data_uri(self) -> str:
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"


PLACEHOLDER_ASSET: Final = Asset(PLACEHOLDER_SVG, "image/svg+xml")


class AssetFetcher(Protocol):
    def fetch(self, url: str) -> Asset: ...


def _mime_type(content_type: str | None) -> str:
    if not content_type:
        return DEFAULT_MIME_TYPE
    mime = content_type.split(";", 1)[0].strip().lower()
    return mime or DEFAULT_MIME_TYPE


class HttpAssetFetcher:
    """Fetch remote images with a fixed timeout.

    A shared ``httpx.Client`` is created on first use unless one is passed in.
    """

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        client: httpx.Client | None = None,
    ) -> None:
        self._timeout = timeout
        self._client = client

    def _get_client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(timeout=self._timeout, follow_redirects=True)
        return self._client

    def fetch(self, url: str) -> Asset:
        try:
            response = self._get_client().get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise AssetFetchError(url, f"HTTP {exc.response.status_code}") from exc
        except (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError) as exc:
            raise AssetFetchError(url, str(exc) or type(exc).__name__) from exc
        if not response.content:
            raise AssetFetchError(url, "empty response body")
        return Asset(response.content, _mime_type(response.headers.get("content-type")))

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None


__all__ = [
    "PLACEHOLDER_ASSET",
    "Asset",
    "AssetFetcher",
    "HttpAssetFetcher",
]
