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

"""Error taxonomy shared by the rendering pipeline."""

from __future__ import annotations


class ReceiptKitError(Exception):
    """Base class for receiptkit failures."""


class ValidationError(ReceiptKitError, ValueError):
    """A required request field is missing or malformed."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class AssetFetchError(ReceiptKitError):
    """A remote asset could not be downloaded or decoded."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"error downloading asset {url}: {reason}")
        self.url = url
        self.reason = reason


class RenderingError(ReceiptKitError, RuntimeError):
    """The rasterizer or an encoder rejected its input."""


class StorageError(ReceiptKitError, OSError):
    """The object store rejected an upload."""


__all__ = [
    "AssetFetchError",
    "ReceiptKitError",
    "RenderingError",
    "StorageError",
    "ValidationError",
]
