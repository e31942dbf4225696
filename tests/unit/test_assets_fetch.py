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

import unittest

import httpx

from receiptkit.assets.cache import AssetCache
from receiptkit.assets.fetch import (
    DEFAULT_MIME_TYPE,
    PLACEHOLDER_ASSET,
    Asset,
    HttpAssetFetcher,
)
from receiptkit.core.errors import AssetFetchError


def _fetcher(handler) -> HttpAssetFetcher:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return HttpAssetFetcher(client=client)


class TestHttpAssetFetcher(unittest.TestCase):
    def test_fetch_returns_bytes_and_mime_type(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            self.assertEqual(str(request.url), "https://cdn.example.com/logo.png")
            return httpx.Response(
                200, content=b"\x89PNG", headers={"content-type": "image/png; charset=binary"}
            )

        asset = _fetcher(handler).fetch("https://cdn.example.com/logo.png")
        self.assertEqual(asset, Asset(b"\x89PNG", "image/png"))
        self.assertEqual(asset.data_uri, "data:image/png;base64,iVBORw==")

    def test_missing_content_type_defaults_to_png(self) -> None:
        asset = _fetcher(lambda request: httpx.Response(200, content=b"GIF89a")).fetch(
            "https://cdn.example.com/logo"
        )
        self.assertEqual(asset.mime_type, DEFAULT_MIME_TYPE)

    def test_http_error_status(self) -> None:
        fetcher = _fetcher(lambda request: httpx.Response(404, content=b"missing"))
        with self.assertRaises(AssetFetchError) as ctx:
            fetcher.fetch("https://cdn.example.com/missing.png")
        self.assertEqual(ctx.exception.reason, "HTTP 404")
        self.assertEqual(ctx.exception.url, "https://cdn.example.com/missing.png")

    def test_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with self.assertRaises(AssetFetchError) as ctx:
            _fetcher(handler).fetch("https://cdn.example.com/logo.png")
        self.assertIn("connection refused", ctx.exception.reason)

    def test_malformed_url(self) -> None:
        fetcher = _fetcher(lambda request: httpx.Response(200, content=b"x"))
        with self.assertRaises(AssetFetchError) as ctx:
            fetcher.fetch("http://[::1")
        self.assertEqual(ctx.exception.url, "http://[::1")

    def test_malformed_url_resolves_to_placeholder(self) -> None:
        fetcher = _fetcher(lambda request: httpx.Response(200, content=b"x"))
        self.assertEqual(AssetCache(fetcher).resolve("http://[::1"), PLACEHOLDER_ASSET)

    def test_empty_body(self) -> None:
        fetcher = _fetcher(lambda request: httpx.Response(200, content=b""))
        with self.assertRaises(AssetFetchError):
            fetcher.fetch("https://cdn.example.com/empty.png")

    def test_close_releases_client(self) -> None:
        fetcher = _fetcher(lambda request: httpx.Response(200, content=b"x"))
        fetcher.fetch("https://cdn.example.com/x.png")
        fetcher.close()
        fetcher.close()


if __name__ == "__main__":
    unittest.main()
