from __future__ import annotations

"""Vector PDF export of paginated worksheet blocks.

Drawing follows the same cell model as the on-screen preview
(`hanzi_sheet.domain.grid_render.render_block`); only the output medium
differs.
"""

import logging
import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Sequence

from hanzi_sheet.domain.grid_render import Cell, render_block
from hanzi_sheet.domain.layout_params import LayoutParameters
from hanzi_sheet.domain.page_geometry import (
    CONTENT_WIDTH_PT,
    GRID_BORDER_WIDTH_PT,
    GRID_BOX_HEIGHT_PT,
    GRIDS_PER_ROW,
    HEADER_HEIGHT_PT,
    MARGIN_PT,
)
from hanzi_sheet.domain.pagination import Page
from hanzi_sheet.services import app_config
from hanzi_sheet.services.pdf_surface import DrawingSurface, ReportlabSurface

logger = logging.getLogger(__name__)

GRID_LINE_COLOR = "#56ab91"
GUIDE_DASH = (3, 3)
GUIDE_LINE_WIDTH = 1.0
PINYIN_FONT_SIZE = 10
PINYIN_INSET_PT = 2.0
GLYPH_SCALE = 0.9

CJK_FONT_KEY = "KaiTi_GB2312"
PINYIN_FONT_KEY = "InterTight"


class ExportError(RuntimeError):
    """Raised when a worksheet cannot be drawn or written."""


@dataclass(frozen=True)
class FontSources:
    """Where to read font bytes from. Paths may be missing; that is not an error."""

    cjk_font: Optional[Path] = None
    pinyin_font: Optional[Path] = None

    @classmethod
    def from_config(cls) -> "FontSources":
        return cls(cjk_font=app_config.cjk_font_path(), pinyin_font=app_config.pinyin_font_path())


def glyph_font_size(cell_width: float, cell_height: float) -> int:
    return int(math.floor(min(cell_height * GLYPH_SCALE, cell_width * GLYPH_SCALE)))


def gray_for_opacity(opacity: float) -> int:
    """Grey level that imitates black ink at `opacity` over white paper."""
    if opacity >= 1:
        return 0
    return int(round(255 * (1 - max(0.0, float(opacity)))))


def has_any_glyph(pages: Sequence[Page]) -> bool:
    return any(b.is_character and b.char for page in pages for b in page)


def has_any_pronunciation(pages: Sequence[Page]) -> bool:
    return any(b.pronunciation and str(b.pronunciation).strip() for page in pages for b in page)


def _register(surface: DrawingSurface, key: str, path: Optional[Path]) -> bool:
    if path is None:
        return False
    try:
        data = Path(path).read_bytes()
        surface.register_font(key, data)
        return True
    except Exception as e:
        logger.warning("Font %s could not be registered from %s: %s; using built-in font", key, path, e)
        return False


def _resolve_fonts(
    surface: DrawingSurface, pages: Sequence[Page], params: LayoutParameters, fonts: FontSources
) -> tuple[str, str]:
    """Return (glyph_font, pinyin_font) names, registering custom fonts on demand."""
    glyph_font = surface.builtin_font(cjk=False)
    if has_any_glyph(pages):
        if _register(surface, CJK_FONT_KEY, fonts.cjk_font):
            glyph_font = CJK_FONT_KEY
        else:
            glyph_font = surface.builtin_font(cjk=True)

    pinyin_font = surface.builtin_font(cjk=False)
    if params.show_pronunciation_header and has_any_pronunciation(pages):
        if _register(surface, PINYIN_FONT_KEY, fonts.pinyin_font):
            pinyin_font = PINYIN_FONT_KEY
        else:
            # Tone marks (ǐ, ǎ, ǜ) are outside WinAnsi; the CJK CID font covers them.
            pinyin_font = surface.builtin_font(cjk=True)
    return glyph_font, pinyin_font


def _draw_cell(surface: DrawingSurface, cell: Cell, x: float, y: float, w: float, h: float, glyph_font: str) -> None:
    surface.set_stroke(GRID_LINE_COLOR, GRID_BORDER_WIDTH_PT * 2)
    surface.rect(x, y, w, h)

    guides = [seg for seg in cell.guide_lines if seg.dashed]
    if guides:
        surface.set_stroke(GRID_LINE_COLOR, GUIDE_LINE_WIDTH, GUIDE_DASH)
        for seg in guides:
            surface.line(x + seg.x1 * w, y + seg.y1 * h, x + seg.x2 * w, y + seg.y2 * h)
        surface.set_stroke(GRID_LINE_COLOR, GUIDE_LINE_WIDTH)

    if cell.glyph:
        surface.set_font(glyph_font, glyph_font_size(w, h))
        surface.set_text_gray(gray_for_opacity(cell.glyph_opacity))
        surface.text(cell.glyph, x + w / 2, y + h / 2, align="center", middle=True)


def draw_pages(
    surface: DrawingSurface,
    pages: Sequence[Page],
    params: LayoutParameters,
    fonts: FontSources = FontSources(),
) -> None:
    glyph_font, pinyin_font = _resolve_fonts(surface, pages, params, fonts)
    box_w = CONTENT_WIDTH_PT / GRIDS_PER_ROW
    box_h = GRID_BOX_HEIGHT_PT

    for page_index, page in enumerate(pages):
        if page_index > 0:
            surface.new_page()

        origin_x = MARGIN_PT
        cursor_y = MARGIN_PT

        for block in page:
            rendered = render_block(block, params)
            cursor_y += float(params.top_spacing)

            if params.show_pronunciation_header:
                if rendered.header_text:
                    surface.set_font(pinyin_font, PINYIN_FONT_SIZE)
                    surface.set_text_gray(0)
                    surface.text(
                        rendered.header_text,
                        origin_x + PINYIN_INSET_PT,
                        cursor_y + HEADER_HEIGHT_PT / 2 + 3,
                        align="left",
                    )
                cursor_y += HEADER_HEIGHT_PT

            for row in rendered.rows():
                col_x = origin_x
                for cell in row:
                    _draw_cell(surface, cell, col_x, cursor_y, box_w, box_h, glyph_font)
                    col_x += box_w
                cursor_y += box_h


def export_document(
    pages: Sequence[Page],
    params: LayoutParameters,
    *,
    fonts: FontSources = FontSources(),
    surface_factory: Callable[[], DrawingSurface] = ReportlabSurface,
) -> bytes:
    """Render `pages` to PDF bytes. Any drawing failure raises ExportError."""
    try:
        surface = surface_factory()
        draw_pages(surface, pages, params, fonts)
        return surface.finish()
    except ExportError:
        raise
    except Exception as e:
        raise ExportError("Vector PDF generation failed: {}".format(e)) from e


def export_to_file(
    path: str | Path,
    pages: Sequence[Page],
    params: LayoutParameters,
    *,
    fonts: FontSources = FontSources(),
    surface_factory: Callable[[], DrawingSurface] = ReportlabSurface,
) -> Optional[Path]:
    """Write the worksheet to `path` atomically.

    Returns the written path, or None when there is nothing to export. The
    target file is only replaced once the whole document rendered; a failed
    export leaves no file behind.
    """
    if not pages:
        logger.info("Export skipped: no pages")
        return None

    data = export_document(pages, params, fonts=fonts, surface_factory=surface_factory)

    p = Path(path)
    tmp = p.with_suffix(p.suffix + ".tmp")
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
        tmp.write_bytes(data)
        os.replace(str(tmp), str(p))
    except OSError as e:
        try:
            tmp.unlink()
        except OSError:
            pass
        raise ExportError("Could not write {}: {}".format(p, e)) from e

    logger.info("Exported %d page(s) to %s", len(pages), p)
    return p
