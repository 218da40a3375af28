"""
EPL Handler
===========

Handler for EPL2 (Eltron Programming Language) printers.
Works with Zebra LP/TLP 2844, GK420 and ZD series printers in EPL mode.

Key Commands:
- Q p,g             - Label length and gap (dots)
- q w               - Label width (dots)
- S n               - Print speed
- D n               - Print darkness (0-15)
- R x,y             - Reference point (home position)
- N                 - Clear image buffer
- X x1,y1,t,x2,y2   - Draw box
- A x,y,r,f,h,v,N,"data"           - Text
- B x,y,r,s,n,w,h,B,"data"         - Barcode
- P n               - Print n labels
"""

from .base import BaseHandler
from ..models import LabelDocument, TextField, BarcodeField, BoxField


class EPLHandler(BaseHandler):
    """Handler for EPL2 printers."""

    language = 'epl'
    encoding = 'latin-1'

    # Barcode selection codes
    SYMBOLOGIES = {
        'code128': '1',
        'code39': '3',
        'ean13': 'E30',
        'interleaved2of5': '2',
    }

    @staticmethod
    def _quote(value: str) -> str:
        """Escape backslashes and double quotes inside an EPL data field."""
        return str(value).replace('\\', '\\\\').replace('"', '\\"')

    def page_setup(self, document: LabelDocument) -> list:
        return [
            '',
            f'Q{document.page_length},{document.label_gap}',
            f'q{document.page_width}',
            f'S{document.speed}',
            f'D{document.darkness}',
            f'R{document.home_x},{document.home_y}',
            'N',
        ]

    def page_end(self, document: LabelDocument) -> list:
        return [f'P{document.copies}']

    def text(self, field: TextField) -> str:
        # A x,y,rotation,font,h-mult,v-mult,reverse,"data"
        return (f'A{field.x},{field.y},{field.rotation},{field.font},'
                f'{field.width},{field.height},N,"{self._quote(field.content)}"')

    def barcode(self, field: BarcodeField) -> str:
        # B x,y,rotation,selection,narrow,wide,height,human,"data"
        selection = self.SYMBOLOGIES.get(field.symbology, '1')
        human = 'B' if field.human_readable else 'N'
        return (f'B{field.x},{field.y},{field.rotation},{selection},'
                f'{field.narrow_width},{field.wide_width},{field.height},{human},'
                f'"{self._quote(field.data)}"')

    def box(self, field: BoxField) -> str:
        # X x1,y1,thickness,x2,y2
        return (f'X{field.x},{field.y},{field.thickness},'
                f'{field.x + field.width},{field.y + field.height}')
