"""
Record Normalizer
=================

Maps inbound patient/lab-order payloads onto the canonical model.

Callers have sent the same concepts under different keys over time, so each
logical field is resolved from an ordered list of accessor paths. The first
path that yields a non-null value wins. The tables below are plain data and can
be extended without touching the resolution code.

Example payload (the shape the lab system sends):

    {
        "id": "P1",
        "patient": {
            "name": "Jane Doe",
            "visit_number": "V100",
            "lab_requests": [
                {"name": "CBC", "main_test": {"container": {"id": 7, "name": "EDTA"}}}
            ]
        }
    }
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from ..errors import MalformedPayloadError
from ..models import Patient, Container, LabRequest

logger = logging.getLogger(__name__)

UNKNOWN_TEST_NAME = 'Unknown test'

Accessor = Callable[[Any], Any]


def path(*keys: str) -> Accessor:
    """Build an accessor that walks nested mappings along keys."""
    def accessor(record: Any) -> Any:
        value = record
        for key in keys:
            if not isinstance(value, dict):
                return None
            value = value.get(key)
        return value

    accessor.path = '.'.join(keys)
    return accessor


# =============================================================================
# Alias tables (priority order)
# =============================================================================

LAB_REQUEST_LIST_ALIASES = [
    path('patient', 'lab_requests'),
    path('lab_requests'),
    path('patient', 'labRequests'),
    path('labRequests'),
]

PATIENT_ALIASES: Dict[str, List[Accessor]] = {
    'id': [
        path('id'),
        path('patient', 'id'),
        path('patient_id'),
        path('patient', 'patient_id'),
        path('patient', 'pid'),
    ],
    'name': [
        path('patient', 'name'),
        path('patient', 'full_name'),
        path('name'),
        path('patient', 'fullname'),
    ],
    'visit_number': [
        path('patient', 'visit_number'),
        path('patient', 'visitNumber'),
        path('visit_number'),
        path('visitNumber'),
        path('patient', 'visit_no'),
    ],
}

LAB_REQUEST_ALIASES: Dict[str, List[Accessor]] = {
    'test_name': [
        path('name'),
        path('test_name'),
        path('testName'),
        path('main_test', 'name'),
        path('test', 'name'),
    ],
    'container': [
        path('main_test', 'container'),
        path('container'),
        path('test', 'container'),
    ],
}

CONTAINER_ALIASES: Dict[str, List[Accessor]] = {
    'id': [
        path('id'),
        path('container_id'),
        path('containerId'),
    ],
    'display_name': [
        path('name'),
        path('display_name'),
        path('displayName'),
        path('container_name'),
    ],
}


def resolve(record: Any, accessors: Sequence[Accessor]) -> Tuple[Any, Optional[str]]:
    """Return (value, path) of the first accessor giving a non-null value."""
    for accessor in accessors:
        value = accessor(record)
        if value is not None:
            return value, getattr(accessor, 'path', None)
    return None, None


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def _resolve_field(record: Any, table: Dict[str, List[Accessor]], name: str, context: str) -> Any:
    value, used = resolve(record, table[name])
    if used:
        logger.debug("%s.%s resolved from '%s'", context, name, used)
    return value


def normalize_container(value: Any) -> Optional[Container]:
    """
    Build a Container from a container object or a bare container id.

    Returns None when no id can be resolved (None or blank).
    """
    if isinstance(value, dict):
        container_id = _resolve_field(value, CONTAINER_ALIASES, 'id', 'container')
        display_name = _as_text(_resolve_field(value, CONTAINER_ALIASES, 'display_name', 'container'))
    elif isinstance(value, (str, int)) and not isinstance(value, bool):
        container_id, display_name = value, None
    else:
        return None

    if not isinstance(container_id, (str, int, float)) or isinstance(container_id, bool):
        return None
    if isinstance(container_id, str) and not container_id.strip():
        return None
    return Container(id=container_id, display_name=display_name or None)


def _resolve_container(entry: Dict[str, Any], context: str) -> Optional[Container]:
    """First container alias that yields a usable id; its display name comes with it."""
    for accessor in LAB_REQUEST_ALIASES['container']:
        container = normalize_container(accessor(entry))
        if container is not None:
            logger.debug("%s.container resolved from '%s'", context, accessor.path)
            return container
    return None


def normalize_lab_request(entry: Any, index: int = 0) -> LabRequest:
    """Normalize one lab request entry. Never raises."""
    if not isinstance(entry, dict):
        logger.warning("Lab request at index %d is not an object, skipping container", index)
        return LabRequest(test_name=UNKNOWN_TEST_NAME)

    context = f'lab_requests[{index}]'
    test_name = _as_text(_resolve_field(entry, LAB_REQUEST_ALIASES, 'test_name', context))
    if test_name is None:
        logger.warning("%s has no test name, using placeholder", context)
        test_name = UNKNOWN_TEST_NAME

    container = _resolve_container(entry, context)
    if container is None:
        logger.debug("%s has no resolvable container id", context)

    return LabRequest(test_name=test_name, container=container)


def normalize_patient(payload: Dict[str, Any]) -> Patient:
    """Resolve patient identifiers from the payload."""
    return Patient(
        id=_as_text(_resolve_field(payload, PATIENT_ALIASES, 'id', 'patient')),
        name=_as_text(_resolve_field(payload, PATIENT_ALIASES, 'name', 'patient')),
        visit_number=_as_text(_resolve_field(payload, PATIENT_ALIASES, 'visit_number', 'patient')),
    )


def normalize(payload: Any) -> Tuple[Patient, List[LabRequest]]:
    """
    Normalize an inbound record into a Patient and its LabRequests.

    Raises:
        MalformedPayloadError: payload is not an object, or the lab request
            list is missing or not a list.
    """
    if not isinstance(payload, dict):
        raise MalformedPayloadError('Request body must be a JSON object')

    entries, used = resolve(payload, LAB_REQUEST_LIST_ALIASES)
    if entries is None:
        raise MalformedPayloadError('No lab requests found for patient')
    if not isinstance(entries, (list, tuple)):
        raise MalformedPayloadError(f"'{used}' must be a list")
    logger.debug("lab requests resolved from '%s'", used)

    patient = normalize_patient(payload)
    requests = [normalize_lab_request(entry, i) for i, entry in enumerate(entries)]
    return patient, requests
