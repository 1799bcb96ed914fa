"""Document-store contract for job and application records.

The real store lives outside this package; the evaluation core only reads
one job, reads one application, and writes fields back onto it.
"""

import copy
import logging
from typing import Any, Protocol

from models.application import ApplicationRecord
from models.job import JobDescriptor
from services.errors import PersistenceError

logger = logging.getLogger(__name__)


class ApplicationStore(Protocol):
    async def get_job(self, job_id: str) -> JobDescriptor:
        ...

    async def get_application(self, application_id: str) -> ApplicationRecord:
        ...

    async def update_application(self, application_id: str, fields: dict[str, Any]) -> None:
        """Merge camelCase ``fields`` into the stored record."""
        ...


class InMemoryApplicationStore:
    """Dict-backed store for local runs and tests."""

    def __init__(
        self,
        jobs: dict[str, JobDescriptor] | None = None,
        applications: dict[str, dict[str, Any]] | None = None,
    ) -> None:
        self.jobs = dict(jobs or {})
        self.applications = {k: dict(v) for k, v in (applications or {}).items()}
        self.writes: list[tuple[str, dict[str, Any]]] = []

    async def get_job(self, job_id: str) -> JobDescriptor:
        try:
            return self.jobs[job_id]
        except KeyError:
            raise PersistenceError(f"Job not found: {job_id}") from None

    async def get_application(self, application_id: str) -> ApplicationRecord:
        try:
            raw = self.applications[application_id]
        except KeyError:
            raise PersistenceError(f"Application not found: {application_id}") from None
        return ApplicationRecord.model_validate({"id": application_id, **raw})

    async def update_application(self, application_id: str, fields: dict[str, Any]) -> None:
        if application_id not in self.applications:
            raise PersistenceError(f"Application not found: {application_id}")
        self.applications[application_id].update(copy.deepcopy(fields))
        self.writes.append((application_id, copy.deepcopy(fields)))
        logger.info("Application %s updated: %s", application_id, ", ".join(sorted(fields)))
