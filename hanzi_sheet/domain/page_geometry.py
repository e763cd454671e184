from __future__ import annotations

"""Fixed page geometry, in PDF points (1/72 in).

Preview and export both read these values; changing one here changes both.
"""

from typing import Final

from hanzi_sheet.domain.layout_params import LayoutParameters

PAGE_WIDTH_PT: Final[float] = 8.5 * 72
PAGE_HEIGHT_PT: Final[float] = 11 * 72
MARGIN_PT: Final[float] = 18.0

CONTENT_WIDTH_PT: Final[float] = PAGE_WIDTH_PT - MARGIN_PT * 2
CONTENT_HEIGHT_PT: Final[float] = PAGE_HEIGHT_PT - MARGIN_PT * 2

HEADER_HEIGHT_PT: Final[float] = 15.0
GRIDS_PER_ROW: Final[int] = 11
GRID_BORDER_WIDTH_PT: Final[float] = 0.5

# Box height leaves room for the container border on both sides.
GRID_BOX_HEIGHT_PT: Final[float] = (CONTENT_WIDTH_PT - 2 * GRID_BORDER_WIDTH_PT) / GRIDS_PER_ROW
GRID_BOX_WIDTH_PT: Final[float] = CONTENT_WIDTH_PT / GRIDS_PER_ROW


def header_height(params: LayoutParameters) -> float:
    return HEADER_HEIGHT_PT if params.show_pronunciation_header else 0.0


def block_height(params: LayoutParameters) -> float:
    """Total vertical space one character block occupies on a page."""
    return (
        float(params.top_spacing)
        + header_height(params)
        + GRID_BOX_HEIGHT_PT * int(params.rows_per_character)
        + GRID_BORDER_WIDTH_PT * 2
    )
