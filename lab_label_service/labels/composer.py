"""
Label Composer
==============

Lays out one container label as a sequence of drawing primitives.

Layout (203 dpi, 312 x 200 dots by default):

    +------------------------------+
    | V100                         |   visit number, large font
    | ||||||||||||||||||           |   Code 128 barcode of the patient id
    | P1                           |   human readable line
    | CBC - Glucose - HbA1c - Lipi |   test names, wrapped every N chars
    | d Panel                      |
    | EDTA 4ml                     |   container name
    +------------------------------+

The box is emitted first so that every other primitive is drawn on top of it.
"""

from typing import List, Optional, Sequence

from .text import chunk
from ..models import (
    Patient, ContainerGroup, LayoutConfig, LabelDocument,
    TextField, BarcodeField, BoxField,
)

VISIT_NUMBER_FALLBACK = 'N/A'
BARCODE_FALLBACK = '0'
TEST_SEPARATOR = ' - '

# Fixed layout preset (dots)
VISIT_X, VISIT_Y = 15, 10
VISIT_FONT, VISIT_MULT = 3, 2

BARCODE_X, BARCODE_Y = 15, 52
BARCODE_HEIGHT = 40
BARCODE_NARROW, BARCODE_WIDE = 2, 3

TESTS_X, TESTS_Y = 15, 115
TESTS_FONT = 1
LINE_STEP = 20

CONTAINER_FONT = 1
BOX_THICKNESS = 2


def _present(value: Optional[str]) -> bool:
    return value is not None and str(value).strip() != ''


def barcode_value(patient: Patient) -> str:
    """Patient id, else visit number, else a literal '0'."""
    for candidate in (patient.id, patient.visit_number):
        if _present(candidate):
            return str(candidate)
    return BARCODE_FALLBACK


def wrap_test_names(test_names: Sequence[str], width: int) -> List[str]:
    """Join test names and wrap them, dropping lines that are blank."""
    joined = TEST_SEPARATOR.join(test_names)
    return [line for line in chunk(joined, width) if line.strip()]


def compose(patient: Patient, group: ContainerGroup, layout: LayoutConfig = None) -> LabelDocument:
    """
    Compose the label for one container group.

    Never fails on missing optional data and never mutates its inputs.
    """
    layout = layout or LayoutConfig()
    margin = layout.margin_dots

    primitives = [
        BoxField(
            x=margin,
            y=margin,
            width=max(layout.page_width_dots - 2 * margin, 1),
            height=max(layout.page_length_dots - 2 * margin, 1),
            thickness=BOX_THICKNESS,
        ),
        TextField(
            x=VISIT_X,
            y=VISIT_Y,
            content=patient.visit_number if _present(patient.visit_number) else VISIT_NUMBER_FALLBACK,
            font=VISIT_FONT,
            height=VISIT_MULT,
            width=VISIT_MULT,
        ),
        BarcodeField(
            x=BARCODE_X,
            y=BARCODE_Y,
            data=barcode_value(patient),
            symbology='code128',
            narrow_width=BARCODE_NARROW,
            wide_width=BARCODE_WIDE,
            height=BARCODE_HEIGHT,
            human_readable=True,
        ),
    ]

    y = TESTS_Y
    for line in wrap_test_names(group.test_names, layout.line_width_chars):
        primitives.append(TextField(x=TESTS_X, y=y, content=line, font=TESTS_FONT))
        y += LINE_STEP

    if _present(group.container.display_name):
        primitives.append(TextField(
            x=TESTS_X, y=y, content=group.container.display_name, font=CONTAINER_FONT,
        ))

    return LabelDocument(
        primitives=tuple(primitives),
        page_width=layout.page_width_dots,
        page_length=layout.page_length_dots,
        darkness=layout.darkness_level,
        speed=layout.print_speed_code,
        label_gap=layout.label_gap_dots,
        copies=layout.copies,
        container_id=group.container.id,
    )


def compose_all(patient: Patient, groups: Sequence[ContainerGroup],
                layout: LayoutConfig = None) -> List[LabelDocument]:
    return [compose(patient, g, layout) for g in groups]
