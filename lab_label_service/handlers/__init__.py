"""
Lab Label Service Handlers
==========================

Printer language handlers.
"""

from .base import BaseHandler
from .epl import EPLHandler
from .zpl import ZPLHandler

__all__ = ['BaseHandler', 'EPLHandler', 'ZPLHandler', 'get_handler']

# Handler registry
HANDLERS = {
    'epl': EPLHandler,
    'zpl': ZPLHandler,
}


def get_handler(handler_type: str) -> type:
    """Get handler class by type."""
    return HANDLERS.get((handler_type or '').lower())
