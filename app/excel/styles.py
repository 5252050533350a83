"""
Colors, fonts, fills, borders and alignments for the sales exports.
"""
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

# Dashboard palette
INDIGO = "4338CA"
SLATE = "334155"
MUTED = "64748B"
STRIPE = "F1F5F9"
TOTAL_BG = "E0E7FF"
GRID = "CBD5E1"
WHITE = "FFFFFF"


def _solid(color: str) -> PatternFill:
    return PatternFill(start_color=color, end_color=color, fill_type="solid")


def _box(color: str, top: str = "thin", bottom: str = "thin") -> Border:
    edge = Side(style="thin", color=color)
    return Border(left=edge, right=edge, top=Side(style=top, color=color), bottom=Side(style=bottom, color=color))


TITLE_FONT = Font(name="Calibri", size=18, bold=True, color=INDIGO)
SUBTITLE_FONT = Font(name="Calibri", size=11, italic=True, color=MUTED)
HEADER_FONT = Font(name="Calibri", size=11, bold=True, color=WHITE)
CELL_FONT = Font(name="Calibri", size=10, color=SLATE)
TOTAL_FONT = Font(name="Calibri", size=10, bold=True, color=SLATE)
KPI_VALUE_FONT = Font(name="Calibri", size=20, bold=True, color=INDIGO)
KPI_LABEL_FONT = Font(name="Calibri", size=10, color=MUTED)

HEADER_FILL = _solid(INDIGO)
STRIPE_FILL = _solid(STRIPE)
TOTAL_FILL = _solid(TOTAL_BG)

CELL_BORDER = _box(GRID)
HEADER_BORDER = _box(INDIGO, bottom="medium")
TOTAL_BORDER = _box(MUTED, top="medium", bottom="medium")

CENTER = Alignment(horizontal="center", vertical="center")
LEFT = Alignment(horizontal="left", vertical="center")
RIGHT = Alignment(horizontal="right", vertical="center")
