"""
OS Print Spooler
================

Printer enumeration and RAW job submission through the operating system.

- Windows: win32print (pywin32)
- Linux/macOS: CUPS command line tools (lpstat, lp)
"""

import logging
import re
import subprocess
import sys
from typing import List

from .config import DEFAULT_TIMEOUT
from .errors import SpoolerError

logger = logging.getLogger(__name__)

_LP_REQUEST_ID = re.compile(r'request id is (\S+)')


def list_printers() -> List[str]:
    """Names of the printers known to the OS. Empty on any failure."""
    if sys.platform == 'win32':
        try:
            import win32print
            printers = win32print.EnumPrinters(
                win32print.PRINTER_ENUM_LOCAL | win32print.PRINTER_ENUM_CONNECTIONS
            )
            return [p[2] for p in printers]
        except Exception as e:
            logger.warning("Printer enumeration failed: %s", e)
            return []

    try:
        result = subprocess.run(
            ['lpstat', '-e'], capture_output=True, text=True, timeout=DEFAULT_TIMEOUT
        )
    except (OSError, subprocess.SubprocessError) as e:
        logger.warning("Printer enumeration failed: %s", e)
        return []

    if result.returncode != 0:
        logger.warning("lpstat exited with %s: %s", result.returncode, result.stderr.strip())
        return []
    return [line.strip() for line in result.stdout.splitlines() if line.strip()]


def _submit_win32(printer_name: str, data: bytes, document_name: str) -> str:
    try:
        import win32print
    except ImportError as e:
        raise SpoolerError(f'Missing module: {e}. Install: pip install pywin32') from e

    try:
        handle = win32print.OpenPrinter(printer_name)
    except Exception as e:
        raise SpoolerError(f'Cannot open printer {printer_name!r}: {e}') from e

    try:
        job_id = win32print.StartDocPrinter(handle, 1, (document_name, None, 'RAW'))
        try:
            win32print.StartPagePrinter(handle)
            win32print.WritePrinter(handle, data)
            win32print.EndPagePrinter(handle)
        finally:
            win32print.EndDocPrinter(handle)
    except Exception as e:
        raise SpoolerError(f'Print to {printer_name!r} failed: {e}') from e
    finally:
        win32print.ClosePrinter(handle)

    return str(job_id)


def _submit_cups(printer_name: str, data: bytes, document_name: str) -> str:
    cmd = ['lp', '-d', printer_name, '-o', 'raw', '-t', document_name]
    try:
        result = subprocess.run(cmd, input=data, capture_output=True, timeout=DEFAULT_TIMEOUT)
    except (OSError, subprocess.SubprocessError) as e:
        raise SpoolerError(f'Print to {printer_name!r} failed: {e}') from e

    stdout = result.stdout.decode('utf-8', errors='ignore')
    if result.returncode != 0:
        stderr = result.stderr.decode('utf-8', errors='ignore').strip()
        raise SpoolerError(f'Print to {printer_name!r} failed: {stderr or result.returncode}')

    match = _LP_REQUEST_ID.search(stdout)
    return match.group(1) if match else stdout.strip()


def submit_raw(printer_name: str, data: bytes, document_name: str = 'Lab Label') -> str:
    """
    Queue raw printer commands and return the spooler job id.

    Raises:
        SpoolerError: the job could not be queued.
    """
    if sys.platform == 'win32':
        return _submit_win32(printer_name, data, document_name)
    return _submit_cups(printer_name, data, document_name)
