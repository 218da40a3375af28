"""Unit tests for EPL/ZPL rendering and delivery"""
import socket
from unittest import mock

import pytest

from lab_label_service.errors import SpoolerError
from lab_label_service.handlers import get_handler, EPLHandler, ZPLHandler
from lab_label_service.labels import compose
from lab_label_service.models import (
    Patient, Container, ContainerGroup, LayoutConfig, LabelDocument, Printer, TextField, BarcodeField,
)

PATIENT = Patient(id="P1", visit_number="V100")
GROUP = ContainerGroup(container=Container(id=7, display_name="EDTA"), test_names=("CBC",))


@pytest.fixture
def document():
    return compose(PATIENT, GROUP, LayoutConfig())


def _printer(**kwargs):
    return Printer(name="ZDesigner GK420t", **kwargs)


def test_get_handler():
    assert get_handler("epl") is EPLHandler
    assert get_handler("ZPL") is ZPLHandler
    assert get_handler("tspl") is None
    assert get_handler(None) is None


def test_epl_render(document):
    lines = EPLHandler(_printer()).render(document).splitlines()

    assert lines[1:7] == ["Q200,24", "q312", "S1", "D15", "R0,0", "N"]
    assert lines[7] == "X5,5,2,307,195"
    assert lines[8] == 'A15,10,0,3,2,2,N,"V100"'
    assert lines[9] == 'B15,52,0,1,2,3,40,B,"P1"'
    assert lines[10] == 'A15,115,0,1,1,1,N,"CBC"'
    assert lines[11] == 'A15,135,0,1,1,1,N,"EDTA"'
    assert lines[-1] == "P1"


def test_epl_escapes_quotes():
    handler = EPLHandler(_printer())

    command = handler.text(TextField(x=0, y=0, content='5" tube \\ cap'))

    assert command == 'A0,0,0,1,1,1,N,"5\\" tube \\\\ cap"'


def test_epl_barcode_without_human_readable_line():
    command = EPLHandler(_printer()).barcode(BarcodeField(x=1, y=2, data="X", human_readable=False))

    assert command.endswith(',N,"X"')


def test_zpl_render(document):
    commands = ZPLHandler(_printer(language="zpl")).render(document)
    lines = commands.splitlines()

    assert lines[0] == "^XA"
    assert "^PW312" in lines and "^LL200" in lines and "~SD15" in lines and "^PR1" in lines
    assert "^FO5,5^GB302,190,2^FS" in lines
    assert "^FO15,10^A0N,40,24^FH^FDV100^FS" in lines
    assert "^FO15,52^BY2,2.0,40^BCN,40,Y,N,N^FH^FDP1^FS" in lines
    assert lines[-2:] == ["^PQ1", "^XZ"]


def test_zpl_primitive_order_follows_document(document):
    lines = ZPLHandler(_printer()).render(document).splitlines()
    body = [line for line in lines if line.startswith("^FO")]

    assert body[0].startswith("^FO5,5^GB")
    assert "^BC" in body[2]
    assert body[-1].endswith("^FDEDTA^FS")


def test_zpl_escapes_control_characters():
    command = ZPLHandler(_printer()).text(TextField(x=0, y=0, content="A^XZ~B_C"))

    assert "^FDA_5EXZ_7EB_5FC^FS" in command


def test_zpl_code39():
    command = ZPLHandler(_printer()).barcode(BarcodeField(x=0, y=0, data="123", symbology="code39"))

    assert "^B3N,N,50,Y,N" in command


def test_render_rejects_unknown_primitive():
    doc = LabelDocument(primitives=("bogus",), page_width=1, page_length=1, darkness=1, speed=1)

    with pytest.raises(TypeError):
        EPLHandler(_printer()).render(doc)


def test_send_uses_spooler_without_host(document, fake_spooler):
    result = EPLHandler(_printer()).print_document(document, "Lab Label 7")

    assert result["success"] is True
    assert result["job_id"] == "1"
    printer_name, data, name = fake_spooler.calls[0]
    assert printer_name == "ZDesigner GK420t"
    assert b'"V100"' in data
    assert name == "Lab Label 7"


def test_spooler_failure_is_reported(document, fake_spooler):
    fake_spooler.fail_marker = b"V100"

    result = EPLHandler(_printer()).print_document(document)

    assert result["success"] is False
    assert "paper out" in result["error"]
    assert result["error_type"] == "SpoolerError"


def test_send_uses_socket_with_host(document):
    sock = mock.MagicMock()
    sock.__enter__.return_value = sock
    with mock.patch("socket.create_connection", return_value=sock) as connect:
        result = ZPLHandler(_printer(host="10.0.0.5", port=9100)).print_document(document)

    connect.assert_called_once_with(("10.0.0.5", 9100), timeout=30)
    assert result["success"] is True
    assert result["job_id"].startswith("TCP-")
    assert sock.sendall.call_args[0][0].startswith(b"^XA")


def test_network_errors_become_spooler_errors():
    handler = ZPLHandler(_printer(host="10.0.0.5"))
    with mock.patch("socket.create_connection", side_effect=ConnectionRefusedError()):
        with pytest.raises(SpoolerError, match="refused"):
            handler.send("^XA^XZ")
    with mock.patch("socket.create_connection", side_effect=socket.timeout()):
        with pytest.raises(SpoolerError, match="timeout"):
            handler.send("^XA^XZ")
