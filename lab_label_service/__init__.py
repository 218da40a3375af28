"""
Lab Label Service
=================

Prints specimen container labels for lab orders on thermal label printers.

Supports:
- Zebra EPL2 printers (LP/TLP 2844, GK420, ZD series in EPL mode)
- Zebra ZPL printers (ZD, ZT, GX series)
- Windows spooler, CUPS queues and raw TCP/9100 network printers

Usage:
    python -m lab_label_service

API Endpoints:
    POST /                     - Print labels (legacy)
    POST /api/labels           - Print labels for a patient record
    POST /api/labels/preview   - Render labels without printing
    GET  /api/printers         - Discovered printers
    GET  /api/jobs             - Job history
"""

__version__ = '1.0.0'
__author__ = 'Lab Label Service Contributors'
