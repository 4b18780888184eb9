"""Clean several independent tables in one call."""
from __future__ import annotations

from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
import logging

from .config import CleaningConfig, CleaningError
from .pipeline import CleaningResult, Table, clean_all

logger = logging.getLogger(__name__)

STATUS_COMPLETE = "complete"
STATUS_ERROR = "error"


@dataclass(frozen=True)
class BatchJob:
    name: str
    table: Table
    config: CleaningConfig | None = None


@dataclass(frozen=True)
class BatchOutcome:
    name: str
    status: str
    result: CleaningResult | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == STATUS_COMPLETE


def _run_job(job: BatchJob) -> BatchOutcome:
    try:
        result = clean_all(job.table, job.config)
    except CleaningError as exc:
        logger.warning(f"Cleaning failed for {job.name}: {exc}")
        return BatchOutcome(job.name, STATUS_ERROR, error=str(exc))
    return BatchOutcome(job.name, STATUS_COMPLETE, result=result)


def clean_batch(jobs: Iterable[BatchJob], *, max_workers: int | None = None) -> list[BatchOutcome]:
    """Clean each job's table independently.

    A job whose table or configuration is rejected is reported with an
    ``error`` status and does not stop the others. Outcomes are returned in
    job order. When ``max_workers`` is greater than one, jobs run on a thread
    pool; every run works on its own copies so no locking is needed.
    """
    job_list = list(jobs)
    logger.info(f"Starting batch of {len(job_list):,} tables")

    if max_workers is not None and max_workers > 1 and len(job_list) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            outcomes = list(executor.map(_run_job, job_list))
    else:
        outcomes = [_run_job(job) for job in job_list]

    failed = sum(1 for outcome in outcomes if not outcome.ok)
    logger.info(f"Batch finished: {len(outcomes) - failed:,} complete, {failed:,} failed")
    return outcomes
