"""
Patient Models
==============

Canonical patient, lab request and sample container records.
"""

from dataclasses import dataclass, field, asdict
from typing import Optional, Any, Dict, Tuple


@dataclass(frozen=True)
class Patient:
    """Patient identifiers printed on every label."""

    id: Optional[str] = None
    name: Optional[str] = None
    visit_number: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)


@dataclass(frozen=True)
class Container:
    """Physical sample collection vessel. Identity is by id only."""

    id: Any
    display_name: Optional[str] = field(default=None, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        return {'id': self.id, 'display_name': self.display_name}


@dataclass(frozen=True)
class LabRequest:
    """One ordered test and the container it is collected in."""

    test_name: str
    container: Optional[Container] = None

    @property
    def container_id(self) -> Any:
        return self.container.id if self.container is not None else None


@dataclass(frozen=True)
class ContainerGroup:
    """A container and the test names destined for it, in request order."""

    container: Container
    test_names: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'container': self.container.to_dict(),
            'tests': list(self.test_names),
        }
