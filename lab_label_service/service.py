"""
Label Service
=============

Runs one label request end to end:

    payload -> normalize -> group by container -> compose -> dispatch

Normalization, grouping and composition run synchronously and raise
immediately on malformed input. Dispatch is asynchronous; its results are
only visible through the returned futures and the logs.
"""

import logging
from concurrent.futures import wait as wait_futures
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from . import config, spooler
from .dispatcher import PrintDispatcher, PrintOutcome
from .errors import NoContainersError, UnsupportedLanguageError
from .handlers import get_handler
from .labels import normalize, group, compose_all
from .models import Patient, ContainerGroup, LabelDocument, LayoutConfig, Printer, resolve_printer

logger = logging.getLogger(__name__)


@dataclass
class LabelRequestResult:
    """Everything produced for one request."""

    patient: Patient
    groups: List[ContainerGroup] = field(default_factory=list)
    documents: List[LabelDocument] = field(default_factory=list)
    printer: Optional[Printer] = None
    futures: list = field(default_factory=list)

    @property
    def status(self) -> str:
        return 'submitted' if self.documents else 'noop'

    def wait(self, timeout: float = None) -> List[PrintOutcome]:
        """Block until every submission finished (or timeout); returns finished outcomes."""
        if not self.futures:
            return []
        done, _ = wait_futures(self.futures, timeout=timeout)
        return [f.result() for f in self.futures if f in done]

    def to_dict(self, outcomes: List[PrintOutcome] = None) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = {
            'status': self.status,
            'patient': self.patient.to_dict(),
            'containers': [g.to_dict() for g in self.groups],
            'labels': len(self.documents),
            'printer': self.printer.to_dict() if self.printer else None,
        }
        if outcomes is not None:
            data['jobs'] = [o.to_dict() for o in outcomes]
        return data


class LabelService:
    """Turns patient records into printed container labels."""

    def __init__(self, dispatcher: PrintDispatcher,
                 layout: LayoutConfig = None,
                 discover: Callable[[], List[str]] = spooler.list_printers,
                 no_containers_is_error: bool = None):
        self.dispatcher = dispatcher
        self.layout = layout or LayoutConfig()
        self.discover = discover
        if no_containers_is_error is None:
            no_containers_is_error = config.NO_CONTAINERS_IS_ERROR
        self.no_containers_is_error = no_containers_is_error

    def build(self, payload: Any, layout: LayoutConfig = None) -> LabelRequestResult:
        """Normalize, group and compose without printing."""
        patient, requests = normalize(payload)
        groups = group(patient, requests)

        if not groups:
            if self.no_containers_is_error:
                raise NoContainersError('No valid containers found for patient')
            logger.warning("No valid containers found for patient %s, nothing to print", patient.id)
            return LabelRequestResult(patient=patient)

        documents = compose_all(patient, groups, layout or self.layout)
        return LabelRequestResult(patient=patient, groups=groups, documents=documents)

    def resolve_printer(self, override: Optional[str] = None) -> Printer:
        """Override, else a discovered label printer, else the configured default."""
        discovered = [] if override and override.strip() else self.discover()
        return resolve_printer(override=override, discovered=discovered)

    def print_labels(self, payload: Any, printer_override: Optional[str] = None,
                     layout: LayoutConfig = None) -> LabelRequestResult:
        """
        Compose one label per container and submit them all.

        Returns as soon as every document has been submitted; call
        ``result.wait()`` to block on the print outcomes.

        Raises:
            MalformedPayloadError: the record has no usable lab request list
            NoContainersError: nothing to print and configured to treat it as an error
        """
        result = self.build(payload, layout)
        if not result.documents:
            return result

        result.printer = self.resolve_printer(printer_override)
        logger.info("Submitting %d label(s) for patient %s to %s",
                    len(result.documents), result.patient.id, result.printer.name)
        result.futures = self.dispatcher.dispatch_all(result.documents, result.printer)
        return result

    def preview(self, payload: Any, language: str = None,
                layout: LayoutConfig = None) -> Dict[str, Any]:
        """Render every label to printer commands without printing."""
        language = (language or config.PRINTER_LANGUAGE).lower()
        handler_class = get_handler(language)
        if not handler_class:
            raise UnsupportedLanguageError(
                f'Invalid language. Valid: {list(config.PRINTER_LANGUAGES.keys())}'
            )

        result = self.build(payload, layout)
        handler = handler_class(Printer(name='preview', language=language))
        data = result.to_dict()
        data['language'] = language
        data['documents'] = [
            {
                'container_id': doc.container_id,
                'commands': handler.render(doc),
                'primitives': doc.to_dict()['primitives'],
            }
            for doc in result.documents
        ]
        return data
