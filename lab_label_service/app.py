"""
Lab Label Service - Main Application
====================================

Receives patient/lab-order records and prints one label per sample container.

Run: python -m lab_label_service
"""

import logging
import platform
import socket
import sys
from datetime import datetime

from flask import Flask, request, jsonify
from flask_cors import CORS

from . import __version__, spooler
from .config import (
    PORT, HOST, DEBUG, API_KEY, LOG_LEVEL, DEFAULT_TIMEOUT, JOB_HISTORY_LIMIT,
    PRINTER_LANGUAGE, DEFAULT_PRINTER_NAME,
)
from .dispatcher import PrintDispatcher
from .errors import LabelServiceError, MalformedPayloadError
from .models import JobHistory, LayoutConfig
from .service import LabelService

logger = logging.getLogger(__name__)

# =============================================================================
# Application Setup
# =============================================================================

app = Flask(__name__)
CORS(app)

_history = JobHistory(limit=JOB_HISTORY_LIMIT)
_service = LabelService(PrintDispatcher(history=_history))


def _check_api_key():
    """Validate API key from request (always valid when no key is configured)."""
    if not API_KEY:
        return True

    auth_header = request.headers.get('Authorization', '')
    if auth_header.startswith('Bearer ') and auth_header[7:] == API_KEY:
        return True

    return request.headers.get('X-API-Key') == API_KEY


def _get_payload():
    """JSON body of the request; raises MalformedPayloadError if absent."""
    data = request.get_json(silent=True)
    if data is None:
        raise MalformedPayloadError('Request body required')
    return data


def _layout_from_args() -> LayoutConfig:
    """Layout overrides from query parameters (e.g. ?page_length_dots=240)."""
    overrides = {k: request.args.get(k) for k in LayoutConfig.__dataclass_fields__ if k in request.args}
    try:
        return LayoutConfig.from_dict({**_service.layout.__dict__, **overrides})
    except ValueError as e:
        raise MalformedPayloadError(f'Invalid layout override: {e}')


@app.errorhandler(LabelServiceError)
def handle_service_error(e):
    return jsonify({'success': False, 'error': str(e)}), e.status_code


# =============================================================================
# Health & Info Endpoints
# =============================================================================

@app.route('/api', methods=['GET'])
def api_info():
    """API info (JSON)."""
    return jsonify({
        'service': 'Lab Label Service',
        'version': __version__,
        'status': 'running',
        'endpoints': {
            'health': '/health',
            'labels': '/api/labels',
            'preview': '/api/labels/preview',
            'printers': '/api/printers',
            'jobs': '/api/jobs',
        }
    })


@app.route('/health', methods=['GET'])
def health():
    """Health check with system info."""
    return jsonify({
        'status': 'online',
        'version': __version__,
        'hostname': socket.gethostname(),
        'platform': platform.system(),
        'python': sys.version.split()[0],
        'language': PRINTER_LANGUAGE,
        'jobs_recorded': len(_history),
        'timestamp': datetime.now().isoformat(),
    })


# =============================================================================
# Label Printing
# =============================================================================

@app.route('/', methods=['POST'])
def legacy_print():
    """Legacy endpoint: print and acknowledge without waiting for the printer."""
    try:
        result = _service.print_labels(_get_payload())
    except LabelServiceError as e:
        return jsonify({'status': 'error', 'error': str(e)}), e.status_code

    return jsonify({'status': 'success' if result.documents else 'noop'})


@app.route('/api/labels', methods=['POST'])
def print_labels():
    """Print one label per container.

    Query params:
        printer=NAME   - Printer name override
        wait=true      - Wait for every print job and include outcomes
        <layout field> - Layout override, e.g. page_length_dots=240
    """
    if not _check_api_key():
        return jsonify({'success': False, 'error': 'Invalid API key'}), 401

    payload = _get_payload()
    result = _service.print_labels(
        payload,
        printer_override=request.args.get('printer'),
        layout=_layout_from_args(),
    )

    response = result.to_dict()
    response['success'] = True

    if request.args.get('wait', 'false').lower() == 'true':
        outcomes = result.wait(timeout=DEFAULT_TIMEOUT)
        response['jobs'] = [o.to_dict() for o in outcomes]
        response['all_printed'] = len(outcomes) == len(result.documents) and all(o.success for o in outcomes)

    return jsonify(response), 202 if result.documents else 200


@app.route('/api/labels/preview', methods=['POST'])
def preview_labels():
    """Render labels without printing.

    Query params:
        language=epl|zpl - Printer language (default from config)
    """
    data = _service.preview(
        _get_payload(),
        language=request.args.get('language'),
        layout=_layout_from_args(),
    )
    data['success'] = True
    return jsonify(data)


# =============================================================================
# Printers & Jobs
# =============================================================================

@app.route('/api/printers', methods=['GET'])
def list_printers():
    """Printers known to the OS and the one a request would use."""
    discovered = spooler.list_printers()
    selected = _service.resolve_printer(request.args.get('printer'))

    return jsonify({
        'success': True,
        'printers': discovered,
        'count': len(discovered),
        'selected': selected.to_dict(),
        'default': DEFAULT_PRINTER_NAME,
    })


@app.route('/api/jobs', methods=['GET'])
def list_jobs():
    """List recent jobs."""
    limit = request.args.get('limit', 50, type=int)
    container_id = request.args.get('container_id')

    jobs = _history.list(limit=limit, container_id=container_id)

    return jsonify({
        'success': True,
        'jobs': [j.to_dict() for j in jobs],
        'count': len(jobs)
    })


# =============================================================================
# Main
# =============================================================================

def main():
    """Run the service."""
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    print("=" * 60)
    print("  Lab Label Service")
    print("=" * 60)
    print(f"  Version: {__version__}")
    print(f"  Port: {PORT}")
    print(f"  Language: {PRINTER_LANGUAGE}")
    print(f"  Default printer: {DEFAULT_PRINTER_NAME}")
    print("=" * 60)
    print("  API Endpoints:")
    print("    POST /                    - Print labels (legacy)")
    print("    POST /api/labels          - Print labels")
    print("    POST /api/labels/preview  - Render labels")
    print("    GET  /api/printers        - Discovered printers")
    print("    GET  /api/jobs            - Job history")
    print("    GET  /health              - Health check")
    print("=" * 60)

    app.run(host=HOST, port=PORT, debug=DEBUG)


if __name__ == '__main__':
    main()
