# pylint: disable=redefined-outer-name
import itertools
import threading

import pytest

from lab_label_service import spooler
from lab_label_service.dispatcher import PrintDispatcher
from lab_label_service.errors import SpoolerError
from lab_label_service.models import JobHistory
from lab_label_service.service import LabelService


@pytest.fixture
def single_container_record():
    """Record shape sent by the lab system (top-level id and lab_requests)."""
    return {
        "patient": {"name": "Jane Doe", "visit_number": "V100"},
        "id": "P1",
        "lab_requests": [
            {"name": "CBC", "main_test": {"container": {"id": 7}}},
        ],
    }


@pytest.fixture
def multi_container_payload():
    return {
        "id": "P2",
        "patient": {
            "name": "John Roe",
            "visit_number": "V200",
            "lab_requests": [
                {"name": "CBC", "main_test": {"container": {"id": 7, "name": "EDTA"}}},
                {"name": "Glucose", "main_test": {"container": {"id": 9, "name": "Fluoride"}}},
                {"name": "HbA1c", "main_test": {"container": {"id": 7, "name": "EDTA"}}},
                {"name": "Urinalysis", "main_test": {}},
            ],
        },
    }


class FakeSpooler:
    """Records RAW submissions; fails any job whose data contains a marker."""

    def __init__(self):
        self.calls = []
        self.fail_marker = None
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def submit_raw(self, printer_name, data, document_name='Lab Label'):
        with self._lock:
            self.calls.append((printer_name, data, document_name))
        if self.fail_marker and self.fail_marker in data:
            raise SpoolerError(f'Print to {printer_name!r} failed: paper out')
        return str(next(self._ids))


@pytest.fixture
def fake_spooler(monkeypatch):
    fake = FakeSpooler()
    monkeypatch.setattr(spooler, 'submit_raw', fake.submit_raw)
    monkeypatch.setattr(spooler, 'list_printers', lambda: [])
    monkeypatch.setattr('lab_label_service.config.PRINTER_HOST', None)
    monkeypatch.setattr('lab_label_service.config.PRINTER_LANGUAGE', 'epl')
    return fake


@pytest.fixture
def history():
    return JobHistory(limit=50)


@pytest.fixture
def dispatcher(history):
    d = PrintDispatcher(max_workers=2, history=history)
    yield d
    d.shutdown()


@pytest.fixture
def service(dispatcher, fake_spooler):
    return LabelService(
        dispatcher,
        discover=lambda: ['Microsoft Print to PDF', 'ZDesigner GK420t'],
        no_containers_is_error=False,
    )
