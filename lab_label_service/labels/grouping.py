"""Container grouping: one label per distinct sample container."""

import logging
from typing import Dict, List, Sequence

from ..models import Patient, Container, LabRequest, ContainerGroup

logger = logging.getLogger(__name__)


def group(patient: Patient, requests: Sequence[LabRequest]) -> List[ContainerGroup]:
    """
    Partition lab requests by container id.

    Requests without a container are dropped. Containers appear in order of
    first occurrence and test names keep request order (duplicates kept).
    The first non-empty display name seen for an id is used.
    """
    containers: Dict[object, Container] = {}
    tests: Dict[object, List[str]] = {}

    for request in requests:
        container = request.container
        if container is None or container.id is None:
            continue

        known = containers.get(container.id)
        if known is None:
            containers[container.id] = container
            tests[container.id] = []
        elif not known.display_name and container.display_name:
            containers[container.id] = Container(id=known.id, display_name=container.display_name)

        tests[container.id].append(request.test_name)

    groups = [ContainerGroup(container=c, test_names=tuple(tests[cid])) for cid, c in containers.items()]

    if not groups:
        logger.info("No valid containers found for patient %s", patient.id)
    return groups
