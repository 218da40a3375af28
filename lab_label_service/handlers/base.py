"""
Base Handler
============

Abstract base class for printer language handlers.

A handler turns a LabelDocument into printer commands and delivers them,
either over raw TCP (network printers) or through the OS spooler.
"""

import socket
import uuid
from abc import ABC, abstractmethod
from typing import Dict, Any

from .. import spooler
from ..config import DEFAULT_TIMEOUT
from ..errors import SpoolerError
from ..models import Printer, LabelDocument, TextField, BarcodeField, BoxField


class BaseHandler(ABC):
    """Abstract base class for printer language handlers."""

    language = ''
    encoding = 'utf-8'

    def __init__(self, printer: Printer):
        """Initialize handler with printer configuration."""
        self.printer = printer

    # =========================================================================
    # Rendering
    # =========================================================================

    @abstractmethod
    def page_setup(self, document: LabelDocument) -> list:
        """Commands preceding the primitives."""
        pass

    @abstractmethod
    def page_end(self, document: LabelDocument) -> list:
        """Commands following the primitives."""
        pass

    @abstractmethod
    def text(self, field: TextField) -> str:
        pass

    @abstractmethod
    def barcode(self, field: BarcodeField) -> str:
        pass

    @abstractmethod
    def box(self, field: BoxField) -> str:
        pass

    def render(self, document: LabelDocument) -> str:
        """Render the whole document, primitives in document order."""
        commands = list(self.page_setup(document))
        for primitive in document.primitives:
            if isinstance(primitive, BoxField):
                commands.append(self.box(primitive))
            elif isinstance(primitive, BarcodeField):
                commands.append(self.barcode(primitive))
            elif isinstance(primitive, TextField):
                commands.append(self.text(primitive))
            else:
                raise TypeError(f'Unknown primitive: {primitive!r}')
        commands.extend(self.page_end(document))
        return '\n'.join(commands) + '\n'

    # =========================================================================
    # Delivery
    # =========================================================================

    def _get_connection(self) -> tuple:
        """Get host and port for connection."""
        return self.printer.host, self.printer.port or 9100

    def _send_network(self, data: bytes, timeout: int = DEFAULT_TIMEOUT) -> str:
        """Send raw bytes to a network printer; returns a local job id."""
        host, port = self._get_connection()
        try:
            with socket.create_connection((host, port), timeout=timeout) as sock:
                sock.sendall(data)
        except socket.timeout as e:
            raise SpoolerError(f'Connection timeout to {host}:{port}') from e
        except ConnectionRefusedError as e:
            raise SpoolerError(f'Connection refused by {host}:{port}') from e
        except OSError as e:
            raise SpoolerError(f'Send to {host}:{port} failed: {e}') from e
        return f'TCP-{str(uuid.uuid4())[:8].upper()}'

    def send(self, commands: str, document_name: str = 'Lab Label') -> str:
        """
        Deliver rendered commands to the printer.

        Returns:
            Job id (spooler id, or a generated id for raw TCP)

        Raises:
            SpoolerError: delivery failed
        """
        data = commands.encode(self.encoding, errors='replace')
        if self.printer.host:
            return self._send_network(data)
        return spooler.submit_raw(self.printer.name, data, document_name)

    def print_document(self, document: LabelDocument, document_name: str = 'Lab Label') -> Dict[str, Any]:
        """
        Render and print a label document.

        Returns:
            Dict with success status and job id or error
        """
        try:
            commands = self.render(document)
            job_id = self.send(commands, document_name)
        except SpoolerError as e:
            return {'success': False, 'error': str(e), 'error_type': type(e).__name__}

        return {
            'success': True,
            'job_id': job_id,
            'printer': self.printer.name,
            'format': self.language,
            'bytes_sent': len(commands),
        }
