from __future__ import annotations

"""Drawing surface used by the PDF export.

`DrawingSurface` is the only drawing API the export driver talks to. All
coordinates are PDF points measured from the *top-left* page corner, the same
frame the layout engine and the preview use; `ReportlabSurface` converts to
reportlab's bottom-left origin internally.
"""

import io
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from reportlab.lib.colors import HexColor
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.cidfonts import UnicodeCIDFont
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen import canvas

from hanzi_sheet.domain.page_geometry import PAGE_HEIGHT_PT, PAGE_WIDTH_PT

BUILTIN_TEXT_FONT = "Helvetica"
BUILTIN_CJK_FONT = "STSong-Light"


class DrawingSurface(ABC):
    """Minimal vector-drawing API (absolute positioning, points, top-left origin)."""

    @abstractmethod
    def register_font(self, name: str, data: bytes) -> None:
        """Register a TrueType font from raw bytes. Raises on invalid data."""

    @abstractmethod
    def builtin_font(self, cjk: bool) -> str:
        """Name of a font that is always available (CJK-capable if `cjk`)."""

    @abstractmethod
    def set_font(self, name: str, size: float) -> None: ...

    @abstractmethod
    def set_text_gray(self, level: int) -> None:
        """Text colour as an 8-bit grey level (0 = black, 255 = white)."""

    @abstractmethod
    def set_stroke(self, color: str, width: float, dash: Optional[Sequence[float]] = None) -> None: ...

    @abstractmethod
    def line(self, x1: float, y1: float, x2: float, y2: float) -> None: ...

    @abstractmethod
    def rect(self, x: float, y: float, w: float, h: float) -> None:
        """Stroke-only rectangle with top-left corner (x, y)."""

    @abstractmethod
    def text(self, s: str, x: float, y: float, *, align: str = "left", middle: bool = False) -> None:
        """Draw `s` at (x, y). `y` is the baseline unless `middle` is set, in
        which case the glyphs are vertically centred on `y`."""

    @abstractmethod
    def new_page(self) -> None: ...

    @abstractmethod
    def finish(self) -> bytes: ...


class ReportlabSurface(DrawingSurface):
    """reportlab canvas adapter (US Letter, points)."""

    def __init__(self, *, compress: bool = True) -> None:
        self._buffer = io.BytesIO()
        self._canvas = canvas.Canvas(
            self._buffer,
            pagesize=(PAGE_WIDTH_PT, PAGE_HEIGHT_PT),
            pageCompression=1 if compress else 0,
        )
        self._font_name = BUILTIN_TEXT_FONT
        self._font_size = 10.0
        self._cid_registered = False

    def _y(self, y: float) -> float:
        return PAGE_HEIGHT_PT - y

    def register_font(self, name: str, data: bytes) -> None:
        pdfmetrics.registerFont(TTFont(name, io.BytesIO(data)))

    def builtin_font(self, cjk: bool) -> str:
        if not cjk:
            return BUILTIN_TEXT_FONT
        if not self._cid_registered:
            pdfmetrics.registerFont(UnicodeCIDFont(BUILTIN_CJK_FONT))
            self._cid_registered = True
        return BUILTIN_CJK_FONT

    def set_font(self, name: str, size: float) -> None:
        self._font_name = name
        self._font_size = float(size)
        self._canvas.setFont(name, size)

    def set_text_gray(self, level: int) -> None:
        v = max(0, min(255, int(level))) / 255.0
        self._canvas.setFillColorRGB(v, v, v)

    def set_stroke(self, color: str, width: float, dash: Optional[Sequence[float]] = None) -> None:
        c = self._canvas
        c.setStrokeColor(HexColor(color))
        c.setLineWidth(width)
        if dash:
            c.setDash(list(dash), 0)
        else:
            c.setDash([], 0)

    def line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self._canvas.line(x1, self._y(y1), x2, self._y(y2))

    def rect(self, x: float, y: float, w: float, h: float) -> None:
        self._canvas.rect(x, self._y(y + h), w, h, stroke=1, fill=0)

    def text(self, s: str, x: float, y: float, *, align: str = "left", middle: bool = False) -> None:
        baseline = y
        if middle:
            ascent, descent = pdfmetrics.getAscentDescent(self._font_name, self._font_size)
            # descent is negative; shift so the ink box is centred on y.
            baseline = y + (ascent + descent) / 2.0
        yy = self._y(baseline)
        if align == "center":
            self._canvas.drawCentredString(x, yy, s)
        elif align == "right":
            self._canvas.drawRightString(x, yy, s)
        else:
            self._canvas.drawString(x, yy, s)

    def new_page(self) -> None:
        self._canvas.showPage()

    def finish(self) -> bytes:
        self._canvas.save()
        return self._buffer.getvalue()
