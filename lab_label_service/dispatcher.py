"""
Print Dispatcher
================

Submits composed label documents to a printer, one independent unit of work
per document. Submission returns immediately with a Future; the future
resolves to a PrintOutcome carrying either the job id or the error. A failed
container never affects its siblings and nothing is retried.
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional, Sequence

from .config import DISPATCH_WORKERS
from .errors import UnsupportedLanguageError
from .handlers import get_handler
from .models import LabelDocument, Printer, PrintJob, JobHistory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PrintOutcome:
    """Completion signal for one submitted document."""

    container_id: Any
    printer_name: str
    success: bool
    job_id: Optional[str] = None
    error: Optional[str] = None
    error_type: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class PrintDispatcher:
    """Fan-out submission of label documents on a thread pool."""

    def __init__(self, max_workers: int = DISPATCH_WORKERS, history: JobHistory = None):
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix='label-print')
        self.history = history

    def submit(self, document: LabelDocument, printer: Printer) -> 'Future[PrintOutcome]':
        """Queue one document. Never raises for print failures."""
        job = PrintJob(
            container_id=document.container_id,
            printer_name=printer.name,
            document_name=f'Lab Label {document.container_id}',
            language=printer.language,
            copies=document.copies,
        )
        if self.history is not None:
            self.history.add(job)

        future = self._executor.submit(self._print, document, printer, job)
        future.add_done_callback(self._log_outcome)
        return future

    def dispatch_all(self, documents: Sequence[LabelDocument], printer: Printer) -> List['Future[PrintOutcome]']:
        """Submit every document without waiting for earlier ones."""
        return [self.submit(doc, printer) for doc in documents]

    def shutdown(self, wait: bool = True):
        self._executor.shutdown(wait=wait)

    def _print(self, document: LabelDocument, printer: Printer, job: PrintJob) -> PrintOutcome:
        job.start()

        handler_class = get_handler(printer.language)
        if not handler_class:
            error = f'Unsupported printer language: {printer.language}'
            job.fail(error)
            return PrintOutcome(
                container_id=document.container_id,
                printer_name=printer.name,
                success=False,
                error=error,
                error_type=UnsupportedLanguageError.__name__,
            )

        try:
            result = handler_class(printer).print_document(document, job.document_name)
        except Exception as e:
            logger.exception("Unexpected error printing container %s", document.container_id)
            result = {'success': False, 'error': str(e), 'error_type': type(e).__name__}

        if result['success']:
            job.complete(result.get('job_id'))
        else:
            job.fail(result.get('error', 'Print failed'))

        return PrintOutcome(
            container_id=document.container_id,
            printer_name=printer.name,
            success=result['success'],
            job_id=result.get('job_id'),
            error=result.get('error'),
            error_type=result.get('error_type'),
        )

    @staticmethod
    def _log_outcome(future: Future):
        if future.cancelled():
            return
        outcome = future.result()
        if outcome.success:
            logger.info("Printed label for container %s with job ID: %s", outcome.container_id, outcome.job_id)
        else:
            logger.error("Error printing container %s on %s: %s",
                         outcome.container_id, outcome.printer_name, outcome.error)
