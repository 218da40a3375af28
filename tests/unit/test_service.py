"""Unit tests for the label request workflow"""
from unittest import mock

import pytest

from lab_label_service.errors import MalformedPayloadError, NoContainersError, UnsupportedLanguageError
from lab_label_service.service import LabelService

NO_CONTAINERS = {"id": "P1", "lab_requests": [{"name": "CBC", "main_test": {}}]}


def test_print_labels_one_document_per_container(service, multi_container_payload, fake_spooler):
    result = service.print_labels(multi_container_payload)
    outcomes = result.wait(timeout=5)

    assert result.status == "submitted"
    assert [g.container.id for g in result.groups] == [7, 9]
    assert len(result.documents) == 2
    assert len(outcomes) == 2 and all(o.success for o in outcomes)
    assert {call[0] for call in fake_spooler.calls} == {"ZDesigner GK420t"}


def test_printer_override_skips_discovery(dispatcher, fake_spooler, single_container_record):
    discover = mock.Mock(return_value=["Zebra"])
    service = LabelService(dispatcher, discover=discover)

    result = service.print_labels(single_container_record, printer_override="Ward 3 Zebra")
    result.wait(timeout=5)

    discover.assert_not_called()
    assert result.printer.name == "Ward 3 Zebra"
    assert fake_spooler.calls[0][0] == "Ward 3 Zebra"


def test_no_containers_is_a_noop(service, fake_spooler):
    result = service.print_labels(NO_CONTAINERS)

    assert result.status == "noop"
    assert result.documents == []
    assert result.printer is None
    assert result.wait() == []
    assert fake_spooler.calls == []


def test_no_containers_can_be_an_error(dispatcher, fake_spooler):
    service = LabelService(dispatcher, discover=list, no_containers_is_error=True)

    with pytest.raises(NoContainersError):
        service.print_labels(NO_CONTAINERS)


def test_composer_not_called_without_containers(service):
    with mock.patch("lab_label_service.service.compose_all") as compose_all:
        service.print_labels(NO_CONTAINERS)

    compose_all.assert_not_called()


def test_malformed_payload_raises_before_printing(service, fake_spooler):
    with pytest.raises(MalformedPayloadError):
        service.print_labels({"patient": {"name": "Jane"}})

    assert fake_spooler.calls == []


def test_result_to_dict(service, single_container_record):
    result = service.print_labels(single_container_record)
    outcomes = result.wait(timeout=5)

    data = result.to_dict(outcomes)

    assert data["status"] == "submitted"
    assert data["containers"] == [{"container": {"id": 7, "display_name": None}, "tests": ["CBC"]}]
    assert data["labels"] == 1
    assert data["printer"]["name"] == "ZDesigner GK420t"
    assert data["jobs"][0]["success"] is True


def test_preview_renders_without_printing(service, single_container_record, fake_spooler):
    data = service.preview(single_container_record, language="zpl")

    assert data["language"] == "zpl"
    assert data["documents"][0]["commands"].startswith("^XA")
    assert data["documents"][0]["primitives"][0]["kind"] == "box"
    assert fake_spooler.calls == []


def test_preview_rejects_unknown_language(service, single_container_record):
    with pytest.raises(UnsupportedLanguageError):
        service.preview(single_container_record, language="pdf")


def test_blank_printer_override_still_discovers(dispatcher, fake_spooler, single_container_record):
    discover = mock.Mock(return_value=["Microsoft Print to PDF", "ZDesigner GK420t"])
    service = LabelService(dispatcher, discover=discover)

    result = service.print_labels(single_container_record, printer_override="  ")
    result.wait(timeout=5)

    discover.assert_called_once_with()
    assert result.printer.name == "ZDesigner GK420t"
