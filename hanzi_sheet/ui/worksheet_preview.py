from __future__ import annotations

from typing import Optional, Sequence

from PyQt6.QtCore import QPointF, QRectF, QSize, Qt
from PyQt6.QtGui import QColor, QFont, QPainter, QPaintEvent, QPen
from PyQt6.QtWidgets import QSizePolicy, QWidget

from hanzi_sheet.domain.grid_render import render_block
from hanzi_sheet.domain.layout_params import DEFAULT_LAYOUT, LayoutParameters
from hanzi_sheet.domain.page_geometry import (
    CONTENT_WIDTH_PT,
    GRID_BORDER_WIDTH_PT,
    GRID_BOX_HEIGHT_PT,
    GRIDS_PER_ROW,
    HEADER_HEIGHT_PT,
    MARGIN_PT,
    PAGE_HEIGHT_PT,
    PAGE_WIDTH_PT,
)
from hanzi_sheet.domain.pagination import Page

GRID_LINE_COLOR = QColor("#56ab91")
PAGE_GAP_PT = MARGIN_PT
GLYPH_SCALE = 0.9
GLYPH_FAMILIES = ["KaiTi", "STKaiti", "Kaiti SC", "AR PL UKai CN", "Noto Serif CJK SC"]


class WorksheetPreview(QWidget):
    """Paints paginated worksheet blocks, page by page, scaled to the widget width.

    All geometry is computed in points and scaled once through the painter
    transform, so the preview matches the exported PDF layout.
    """

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setObjectName("worksheetPreview")
        self._pages: tuple[Page, ...] = ()
        self._params: LayoutParameters = DEFAULT_LAYOUT
        sp = self.sizePolicy()
        sp.setHorizontalPolicy(QSizePolicy.Policy.Expanding)
        sp.setVerticalPolicy(QSizePolicy.Policy.Preferred)
        self.setSizePolicy(sp)
        self.setMinimumWidth(300)

    def pages(self) -> tuple[Page, ...]:
        return self._pages

    def set_pages(self, pages: Sequence[Page], params: LayoutParameters) -> None:
        self._pages = tuple(pages)
        self._params = params
        self.updateGeometry()
        self.update()

    def _scale(self, width: Optional[int] = None) -> float:
        w = self.width() if width is None else width
        return max(0.1, float(w) / PAGE_WIDTH_PT)

    def _document_height_pt(self) -> float:
        n = max(1, len(self._pages))
        return n * PAGE_HEIGHT_PT + (n - 1) * PAGE_GAP_PT

    def hasHeightForWidth(self) -> bool:  # noqa: N802
        return True

    def heightForWidth(self, w: int) -> int:  # noqa: N802
        return int(self._document_height_pt() * self._scale(w)) + 1

    def sizeHint(self) -> QSize:  # noqa: N802
        return QSize(int(PAGE_WIDTH_PT), int(self._document_height_pt()))

    def paintEvent(self, event: QPaintEvent) -> None:  # noqa: N802
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
            painter.fillRect(self.rect(), QColor("#e9ecef"))
            painter.scale(self._scale(), self._scale())
            top = 0.0
            for page in self._pages:
                painter.fillRect(QRectF(0, top, PAGE_WIDTH_PT, PAGE_HEIGHT_PT), Qt.GlobalColor.white)
                self._paint_page(painter, page, top)
                top += PAGE_HEIGHT_PT + PAGE_GAP_PT
        finally:
            painter.end()

    def _paint_page(self, painter: QPainter, page: Page, page_top: float) -> None:
        params = self._params
        box_w = CONTENT_WIDTH_PT / GRIDS_PER_ROW
        box_h = GRID_BOX_HEIGHT_PT
        x0 = MARGIN_PT
        y = page_top + MARGIN_PT

        header_font = QFont()
        header_font.setPointSizeF(10)
        glyph_font = QFont()
        glyph_font.setFamilies(GLYPH_FAMILIES)
        glyph_font.setPixelSize(max(1, int(min(box_w, box_h) * GLYPH_SCALE)))

        border_pen = QPen(GRID_LINE_COLOR, GRID_BORDER_WIDTH_PT * 2)
        guide_pen = QPen(GRID_LINE_COLOR, 1.0)
        guide_pen.setStyle(Qt.PenStyle.DashLine)

        for block in page:
            rendered = render_block(block, params)
            y += float(params.top_spacing)

            if params.show_pronunciation_header:
                if rendered.header_text:
                    painter.setOpacity(1.0)
                    painter.setPen(QColor("#000000"))
                    painter.setFont(header_font)
                    painter.drawText(QPointF(x0 + 2, y + HEADER_HEIGHT_PT / 2 + 3), rendered.header_text)
                y += HEADER_HEIGHT_PT

            for row in rendered.rows():
                x = x0
                for cell in row:
                    rect = QRectF(x, y, box_w, box_h)
                    painter.setOpacity(1.0)
                    for seg in cell.guide_lines:
                        painter.setPen(guide_pen if seg.dashed else border_pen)
                        painter.drawLine(
                            QPointF(x + seg.x1 * box_w, y + seg.y1 * box_h),
                            QPointF(x + seg.x2 * box_w, y + seg.y2 * box_h),
                        )
                    if cell.glyph:
                        painter.setOpacity(float(cell.glyph_opacity))
                        painter.setPen(QColor("#000000"))
                        painter.setFont(glyph_font)
                        painter.drawText(rect, Qt.AlignmentFlag.AlignCenter, cell.glyph)
                    x += box_w
                y += box_h
        painter.setOpacity(1.0)
