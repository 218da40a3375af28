"""
Lab Label Service Configuration
"""

import os


def _env_bool(name: str, default: str = 'false') -> bool:
    return os.environ.get(name, default).lower() == 'true'


def _env_list(name: str, default: str) -> list:
    return [item.strip() for item in os.environ.get(name, default).split(',') if item.strip()]


# =============================================================================
# Server Configuration
# =============================================================================

PORT = int(os.environ.get('LAB_LABEL_PORT', 5000))
HOST = os.environ.get('LAB_LABEL_HOST', '0.0.0.0')
DEBUG = _env_bool('LAB_LABEL_DEBUG')

# API key for /api/labels (empty disables the check)
API_KEY = os.environ.get('LAB_LABEL_API_KEY', '')

LOG_LEVEL = os.environ.get('LAB_LABEL_LOG_LEVEL', 'INFO').upper()

# =============================================================================
# Printer Defaults
# =============================================================================

DEFAULT_PRINTER_NAME = os.environ.get('LAB_LABEL_PRINTER', 'ZDesigner ZD888-203dpi ZPL')

# Last resort when nothing else resolves a printer name
FALLBACK_PRINTER_NAME = 'default'

# Case-insensitive substrings matched against OS printer names
PRINTER_KEYWORDS = _env_list('LAB_LABEL_PRINTER_KEYWORDS', 'zdesigner,zebra,tlp,gk420,zd')

# Printer command language: epl or zpl
PRINTER_LANGUAGE = os.environ.get('LAB_LABEL_LANGUAGE', 'epl').lower()

# Network printer (raw TCP) - leave host empty to use the OS spooler
PRINTER_HOST = os.environ.get('LAB_LABEL_PRINTER_HOST') or None
PRINTER_PORT = int(os.environ.get('LAB_LABEL_PRINTER_PORT', 9100))

DEFAULT_TIMEOUT = 30  # seconds

# =============================================================================
# Supported Printer Languages
# =============================================================================

PRINTER_LANGUAGES = {
    'epl': {
        'name': 'Zebra EPL2',
        'handler': 'epl',
    },
    'zpl': {
        'name': 'Zebra ZPL II',
        'handler': 'zpl',
    },
}

# =============================================================================
# Label Layout (203 dpi preset)
# =============================================================================

PAGE_WIDTH_DOTS = int(os.environ.get('LAB_LABEL_PAGE_WIDTH', 312))
PAGE_LENGTH_DOTS = int(os.environ.get('LAB_LABEL_PAGE_LENGTH', 200))
LABEL_GAP_DOTS = int(os.environ.get('LAB_LABEL_GAP', 24))
DARKNESS_LEVEL = int(os.environ.get('LAB_LABEL_DARKNESS', 15))
PRINT_SPEED_CODE = int(os.environ.get('LAB_LABEL_SPEED', 1))
LINE_WIDTH_CHARS = int(os.environ.get('LAB_LABEL_LINE_WIDTH', 20))

# =============================================================================
# Request Handling
# =============================================================================

# Treat "no container could be resolved" as a client error instead of a no-op
NO_CONTAINERS_IS_ERROR = _env_bool('LAB_LABEL_NO_CONTAINERS_IS_ERROR')

DISPATCH_WORKERS = int(os.environ.get('LAB_LABEL_DISPATCH_WORKERS', 4))

# Number of print jobs kept in memory for /api/jobs
JOB_HISTORY_LIMIT = int(os.environ.get('LAB_LABEL_JOB_HISTORY', 200))
