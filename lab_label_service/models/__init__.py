"""
Lab Label Service Models
"""

from .patient import Patient, Container, LabRequest, ContainerGroup
from .label import LayoutConfig, TextField, BarcodeField, BoxField, LabelDocument
from .printer import Printer, resolve_printer
from .job import PrintJob, JobHistory

__all__ = [
    'Patient', 'Container', 'LabRequest', 'ContainerGroup',
    'LayoutConfig', 'TextField', 'BarcodeField', 'BoxField', 'LabelDocument',
    'Printer', 'resolve_printer',
    'PrintJob', 'JobHistory',
]
