"""
Print Job Model
===============

Represents one submitted container label in the job history.
"""

import threading
import uuid
from collections import deque
from datetime import datetime
from dataclasses import dataclass, field, asdict
from typing import Optional, Dict, Any, List


@dataclass
class PrintJob:
    """Print job state."""

    # Identification
    id: str = field(default_factory=lambda: f"JOB-{str(uuid.uuid4())[:8].upper()}")
    container_id: Any = None
    printer_name: str = ""

    # Job details
    document_name: str = ""
    language: str = "epl"
    copies: int = 1

    # Status
    status: str = "pending"  # pending, printing, completed, failed
    spooler_job_id: Optional[str] = None
    error_message: Optional[str] = None

    # Timestamps
    created_at: datetime = field(default_factory=datetime.now)
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = asdict(self)
        # Convert datetime to ISO format
        for key in ['created_at', 'started_at', 'completed_at']:
            if data.get(key):
                data[key] = data[key].isoformat()
        return data

    def start(self):
        """Mark job as started."""
        self.status = "printing"
        self.started_at = datetime.now()

    def complete(self, spooler_job_id: Optional[str] = None):
        """Mark job as completed."""
        self.status = "completed"
        self.completed_at = datetime.now()
        self.spooler_job_id = spooler_job_id

    def fail(self, error: str):
        """Mark job as failed."""
        self.status = "failed"
        self.completed_at = datetime.now()
        self.error_message = error


class JobHistory:
    """Bounded, thread-safe record of recent print jobs."""

    def __init__(self, limit: int = 200):
        self._jobs = deque(maxlen=limit)
        self._lock = threading.Lock()

    def add(self, job: PrintJob) -> PrintJob:
        with self._lock:
            self._jobs.append(job)
        return job

    def list(self, limit: int = 50, container_id: Optional[str] = None) -> List[PrintJob]:
        """Most recent first, optionally filtered by container id."""
        with self._lock:
            jobs = list(self._jobs)
        if container_id is not None:
            jobs = [j for j in jobs if str(j.container_id) == str(container_id)]
        return sorted(jobs, key=lambda j: j.created_at, reverse=True)[:limit]

    def clear(self):
        with self._lock:
            self._jobs.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._jobs)
