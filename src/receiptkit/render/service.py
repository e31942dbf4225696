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

import logging
from dataclasses import dataclass, field
from datetime import datetime
from functools import cached_property
from typing import Final

from ..assets.cache import AssetCache, default_asset_cache
from ..config import AppConfig
from ..core.errors import RenderingError, ValidationError
from ..core.models import DocumentKind, DocumentRequest
from ..qr.codec import QrConfig, qr_data_uri
from ..storage.s3 import KEY_PREFIXES, S3ObjectStore, StoredObject, unique_filename
from .fields import DocumentFields, normalize_fields
from .fonts import FontSet, LoadedFont, default_fonts_dir
from .layout import (
    CanvasSize,
    compute_canvas_size,
    compute_pdf_page_size,
    measure_node,
    sizing_parameters,
)
from .markup import render_markup
from .metrics import QR_IMAGE_SIZE
from .nodes import StyleNode
from .pdf_render import render_receipt_pdf
from .raster import encode_raster
from .tree import build_document_tree

logger = logging.getLogger(__name__)

_RASTER_TYPES: Final[dict[str, tuple[str, str]]] = {
    "jpeg": ("image/jpeg", "jpg"),
    "png": ("image/png", "png"),
}
PDF_MIME_TYPE: Final = "application/pdf"


@dataclass(frozen=True)
class RenderedDocument:
    content: bytes
    mime_type: str
    extension: str
    width: int
    height: int


@dataclass(frozen=True)
class PreparedDocument:
    fields: DocumentFields
    tree: StyleNode
    size: CanvasSize


@dataclass(frozen=True)
class RenderService:
    config: AppConfig = field(default_factory=AppConfig)
    asset_cache: AssetCache | None = None
    font_set: FontSet | None = None
    qr_config: QrConfig = field(default_factory=QrConfig)

    @property
    def assets(self) -> AssetCache:
        if self.asset_cache is not None:
            return self.asset_cache
        return default_asset_cache(self.config.cache)

    @property
    def fonts(self) -> FontSet:
        if self.font_set is not None:
            return self.font_set
        return FontSet(self.config.fonts.directory or default_fonts_dir())

    @cached_property
    def loaded_fonts(self) -> tuple[LoadedFont, ...]:
        fonts = self.fonts.load()
        if not fonts:
            logger.warning(
                "no fonts found in %s; run `receiptkit fonts download`", self.fonts.directory
            )
        return fonts

    def render(self, tree: StyleNode, width: int, height: int) -> bytes:
        """Rasterize a document tree onto a canvas of exactly width x height."""
        size = CanvasSize(width=width, height=height)
        render_cfg = self.config.render
        markup = render_markup(
            tree, size, fonts=self.loaded_fonts, background=render_cfg.background
        )
        return encode_raster(
            markup,
            size,
            background=render_cfg.background,
            quality=render_cfg.jpeg_quality,
            image_format=render_cfg.image_format,
        )

    def normalize(
        self,
        request: DocumentRequest,
        *,
        now: datetime | None = None,
        include_qr: bool = True,
    ) -> DocumentFields:
        """Resolve remote assets and build display fields for a request."""
        logo = self.assets.resolve(request.branding.logo_url)
        powered_by_src = None
        powered_by_url = self.config.assets.powered_by_logo
        if request.kind.is_receipt and powered_by_url:
            powered_by_src = self.assets.resolve(powered_by_url).data_uri
        qr_src = None
        if include_qr and request.kind is DocumentKind.QR and request.qr_data:
            size_px = QR_IMAGE_SIZE * request.resolution.multiplier
            qr_src = qr_data_uri(request.qr_data, size_px, self.qr_config)
        return normalize_fields(
            request,
            logo_src=logo.data_uri,
            powered_by_src=powered_by_src,
            qr_src=qr_src,
            now=now,
            tz=self.config.render.timezone,
        )

    def prepare(self, request: DocumentRequest, *, now: datetime | None = None) -> PreparedDocument:
        fields = self.normalize(request, now=now)
        tree = build_document_tree(request.kind, fields)
        size = compute_canvas_size(request.kind, sizing_parameters(fields))
        if self.config.render.strict_layout:
            measured = measure_node(tree)
            if measured != size.height:
                raise RenderingError(
                    f"{request.kind.value} tree measures {measured:g}px "
                    f"but the canvas is {size.height}px"
                )
        return PreparedDocument(fields=fields, tree=tree, size=size)

    def render_request(
        self, request: DocumentRequest, *, now: datetime | None = None
    ) -> RenderedDocument:
        prepared = self.prepare(request, now=now)
        content = self.render(prepared.tree, prepared.size.width, prepared.size.height)
        mime_type, extension = _RASTER_TYPES[self.config.render.image_format]
        logger.info(
            "rendered %s %dx%d (%d bytes)",
            request.kind.value,
            prepared.size.width,
            prepared.size.height,
            len(content),
        )
        return RenderedDocument(
            content=content,
            mime_type=mime_type,
            extension=extension,
            width=prepared.size.width,
            height=prepared.size.height,
        )

    def render_pdf(
        self, request: DocumentRequest, *, now: datetime | None = None
    ) -> RenderedDocument:
        if not request.kind.is_receipt:
            raise ValidationError(
                f"PDF output is not available for {request.kind.value} documents", field="kind"
            )
        fields = self.normalize(request, now=now, include_qr=False)
        width, height = compute_pdf_page_size(request.kind, sizing_parameters(fields))
        content = render_receipt_pdf(fields, fonts=self.fonts)
        logger.info("rendered %s PDF (%d bytes)", request.kind.value, len(content))
        return RenderedDocument(
            content=content,
            mime_type=PDF_MIME_TYPE,
            extension="pdf",
            width=int(width),
            height=int(height),
        )

    def publish(
        self,
        request: DocumentRequest,
        store: S3ObjectStore,
        *,
        pdf: bool = False,
        now: datetime | None = None,
    ) -> StoredObject:
        """Render a request and upload it, returning the stored object's public URL."""
        document = (
            self.render_pdf(request, now=now) if pdf else self.render_request(request, now=now)
        )
        filename = unique_filename(document.extension)
        return store.upload(
            KEY_PREFIXES[request.kind], filename, document.mime_type, document.content
        )


__all__ = ["PreparedDocument", "RenderService", "RenderedDocument"]
