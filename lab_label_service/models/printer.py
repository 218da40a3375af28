"""
Printer Model
=============

Represents the print target for one request and how it is chosen.
"""

import logging
from dataclasses import dataclass, asdict
from typing import Optional, Dict, Any, Iterable, Sequence

from .. import config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Printer:
    """Resolved print target."""

    name: str
    language: str = 'epl'  # epl, zpl
    connection_mode: str = 'spooler'  # spooler, network
    host: Optional[str] = None  # For network printers
    port: int = 9100  # For network printers
    source: str = 'default'  # override, discovered, default, fallback

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)


def match_printer_name(discovered: Iterable[str], keywords: Sequence[str]) -> Optional[str]:
    """Return the first discovered name containing any keyword (case-insensitive)."""
    lowered = [k.lower() for k in keywords if k]
    for name in discovered:
        if not name:
            continue
        if any(k in name.lower() for k in lowered):
            return name
    return None


def resolve_printer(override: Optional[str] = None,
                    discovered: Optional[Iterable[str]] = None,
                    keywords: Sequence[str] = None,
                    default_name: Optional[str] = None,
                    language: str = None,
                    host: Optional[str] = None,
                    port: int = None) -> Printer:
    """
    Pick the printer for a request.

    Priority: explicit override, then the first OS printer matching a device
    keyword, then the configured default, then a literal fallback name.
    Never raises.
    """
    keywords = config.PRINTER_KEYWORDS if keywords is None else keywords
    default_name = config.DEFAULT_PRINTER_NAME if default_name is None else default_name
    language = (language or config.PRINTER_LANGUAGE).lower()
    host = config.PRINTER_HOST if host is None else host
    port = port or config.PRINTER_PORT

    if override and override.strip():
        name, source = override.strip(), 'override'
    else:
        name = match_printer_name(discovered or [], keywords)
        source = 'discovered'
        if not name and default_name:
            name, source = default_name, 'default'
        if not name:
            name, source = config.FALLBACK_PRINTER_NAME, 'fallback'

    logger.debug("Resolved printer %r from %s", name, source)
    return Printer(
        name=name,
        language=language,
        connection_mode='network' if host else 'spooler',
        host=host or None,
        port=port,
        source=source,
    )
