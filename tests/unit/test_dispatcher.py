"""Unit tests for asynchronous print dispatch"""
from concurrent.futures import wait
from unittest import mock

from lab_label_service.dispatcher import PrintOutcome
from lab_label_service.labels import compose
from lab_label_service.models import Patient, Container, ContainerGroup, Printer

PATIENT = Patient(id="P1", visit_number="V100")
PRINTER = Printer(name="ZDesigner GK420t", language="epl")


def _document(container_id, *tests):
    return compose(PATIENT, ContainerGroup(container=Container(id=container_id), test_names=tests))


def test_submit_returns_job_id(dispatcher, fake_spooler):
    future = dispatcher.submit(_document(7, "CBC"), PRINTER)

    outcome = future.result(timeout=5)
    assert isinstance(outcome, PrintOutcome)
    assert outcome.success is True
    assert outcome.job_id == "1"
    assert outcome.container_id == 7
    assert outcome.printer_name == "ZDesigner GK420t"


def test_one_failure_does_not_affect_siblings(dispatcher, fake_spooler):
    fake_spooler.fail_marker = b'"Glucose"'
    documents = [_document(7, "CBC"), _document(9, "Glucose"), _document(11, "TSH")]

    futures = dispatcher.dispatch_all(documents, PRINTER)
    wait(futures, timeout=5)
    outcomes = {f.result().container_id: f.result() for f in futures}

    assert outcomes[7].success and outcomes[11].success
    assert outcomes[9].success is False
    assert outcomes[9].error_type == "SpoolerError"
    assert len(fake_spooler.calls) == 3


def test_unsupported_language_is_a_failed_outcome(dispatcher, fake_spooler):
    printer = Printer(name="Brady", language="picl")

    outcome = dispatcher.submit(_document(7, "CBC"), printer).result(timeout=5)

    assert outcome.success is False
    assert outcome.error_type == "UnsupportedLanguageError"
    assert fake_spooler.calls == []


def test_unexpected_errors_are_captured(dispatcher):
    with mock.patch("lab_label_service.handlers.epl.EPLHandler.render", side_effect=RuntimeError("boom")):
        outcome = dispatcher.submit(_document(7, "CBC"), PRINTER).result(timeout=5)

    assert outcome.success is False
    assert outcome.error == "boom"
    assert outcome.error_type == "RuntimeError"


def test_jobs_are_recorded(dispatcher, history, fake_spooler):
    fake_spooler.fail_marker = b'"ESR"'
    futures = dispatcher.dispatch_all([_document(7, "CBC"), _document(8, "ESR")], PRINTER)
    wait(futures, timeout=5)

    jobs = {j.container_id: j for j in history.list()}
    assert jobs[7].status == "completed"
    assert jobs[7].spooler_job_id is not None
    assert jobs[8].status == "failed"
    assert "paper out" in jobs[8].error_message
    assert [j.container_id for j in history.list(container_id="8")] == [8]


def test_outcome_to_dict():
    outcome = PrintOutcome(container_id=7, printer_name="Z", success=True, job_id="12")

    assert outcome.to_dict() == {
        "container_id": 7, "printer_name": "Z", "success": True,
        "job_id": "12", "error": None, "error_type": None,
    }
