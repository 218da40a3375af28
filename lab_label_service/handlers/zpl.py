"""
ZPL Handler
===========

Handler for ZPL (Zebra Programming Language) printers.
Works with Zebra ZD/ZT/GX series and CAB printers in ZPL emulation mode.
"""

from .base import BaseHandler
from ..models import LabelDocument, TextField, BarcodeField, BoxField


class ZPLHandler(BaseHandler):
    """Handler for ZPL-compatible printers (Zebra, CAB)."""

    language = 'zpl'

    ROTATIONS = {0: 'N', 1: 'R', 2: 'I', 3: 'B'}

    # EPL resident font cell sizes (width, height) at 203 dpi, so the same
    # document prints at roughly the same size in either language
    FONT_CELLS = {
        1: (8, 12),
        2: (10, 16),
        3: (12, 20),
        4: (14, 24),
        5: (32, 48),
    }

    @staticmethod
    def _field_data(value: str) -> str:
        """Field data with control characters hex-escaped (used with ^FH)."""
        return (str(value)
                .replace('_', '_5F')
                .replace('^', '_5E')
                .replace('~', '_7E'))

    def page_setup(self, document: LabelDocument) -> list:
        return [
            '^XA',
            f'^PW{document.page_width}',
            f'^LL{document.page_length}',
            f'~SD{document.darkness:02d}',
            f'^PR{document.speed}',
            f'^LH{document.home_x},{document.home_y}',
        ]

    def page_end(self, document: LabelDocument) -> list:
        return [f'^PQ{document.copies}', '^XZ']

    def text(self, field: TextField) -> str:
        cell_w, cell_h = self.FONT_CELLS.get(field.font, self.FONT_CELLS[1])
        rotation = self.ROTATIONS.get(field.rotation, 'N')
        return (f'^FO{field.x},{field.y}^A0{rotation},{cell_h * field.height},{cell_w * field.width}'
                f'^FH^FD{self._field_data(field.content)}^FS')

    def barcode(self, field: BarcodeField) -> str:
        rotation = self.ROTATIONS.get(field.rotation, 'N')
        human = 'Y' if field.human_readable else 'N'
        ratio = min(max(field.wide_width / max(field.narrow_width, 1), 2.0), 3.0)
        module = f'^BY{field.narrow_width},{ratio:.1f},{field.height}'

        if field.symbology == 'code39':
            symbol = f'^B3{rotation},N,{field.height},{human},N'
        else:
            symbol = f'^BC{rotation},{field.height},{human},N,N'

        return f'^FO{field.x},{field.y}{module}{symbol}^FH^FD{self._field_data(field.data)}^FS'

    def box(self, field: BoxField) -> str:
        return f'^FO{field.x},{field.y}^GB{field.width},{field.height},{field.thickness}^FS'
