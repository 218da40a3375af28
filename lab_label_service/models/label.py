"""
Label Document Model
====================

Printer-independent drawing primitives and the document that holds them.
Handlers translate a LabelDocument into EPL or ZPL.
"""

from dataclasses import dataclass, field, asdict, replace
from typing import Any, Dict, Optional, Tuple, Union

from .. import config

POSITIVE_FIELDS = ('page_width_dots', 'page_length_dots', 'line_width_chars', 'copies')


@dataclass(frozen=True)
class LayoutConfig:
    """Page attributes and layout knobs. Every field can be overridden."""

    page_width_dots: int = config.PAGE_WIDTH_DOTS
    page_length_dots: int = config.PAGE_LENGTH_DOTS
    darkness_level: int = config.DARKNESS_LEVEL
    print_speed_code: int = config.PRINT_SPEED_CODE
    label_gap_dots: int = config.LABEL_GAP_DOTS
    line_width_chars: int = config.LINE_WIDTH_CHARS
    margin_dots: int = 5
    copies: int = 1

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'LayoutConfig':
        """
        Build from a partial mapping; unknown keys are ignored.

        Raises:
            ValueError: a value is not an integer, or a size or copy count is below 1
        """
        layout = cls()
        if not data:
            return layout
        known = {k: int(v) for k, v in data.items() if k in cls.__dataclass_fields__ and v is not None}
        for key in POSITIVE_FIELDS:
            if key in known and known[key] < 1:
                raise ValueError(f'{key} must be at least 1, got {known[key]}')
        return replace(layout, **known)


@dataclass(frozen=True)
class TextField:
    """TEXT(x, y, rotation, font, height, width, content)."""

    x: int
    y: int
    content: str
    rotation: int = 0
    font: int = 1
    height: int = 1  # vertical multiplier
    width: int = 1   # horizontal multiplier
    kind: str = field(default='text', init=False)


@dataclass(frozen=True)
class BarcodeField:
    """BARCODE(x, y, rotation, symbology, narrowWidth, wideWidth, height, showHumanReadable, data)."""

    x: int
    y: int
    data: str
    rotation: int = 0
    symbology: str = 'code128'
    narrow_width: int = 2
    wide_width: int = 3
    height: int = 50
    human_readable: bool = True
    kind: str = field(default='barcode', init=False)


@dataclass(frozen=True)
class BoxField:
    """BOX(x, y, width, height, thickness)."""

    x: int
    y: int
    width: int
    height: int
    thickness: int = 1
    kind: str = field(default='box', init=False)


Primitive = Union[TextField, BarcodeField, BoxField]


@dataclass(frozen=True)
class LabelDocument:
    """Ordered drawing primitives plus page setup for one container label."""

    primitives: Tuple[Primitive, ...]
    page_width: int
    page_length: int
    darkness: int
    speed: int
    label_gap: int = 24
    home_x: int = 0
    home_y: int = 0
    copies: int = 1
    container_id: Any = None

    @property
    def texts(self) -> Tuple[TextField, ...]:
        return tuple(p for p in self.primitives if isinstance(p, TextField))

    @property
    def barcodes(self) -> Tuple[BarcodeField, ...]:
        return tuple(p for p in self.primitives if isinstance(p, BarcodeField))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = asdict(self)
        data['primitives'] = [asdict(p) for p in self.primitives]
        return data
