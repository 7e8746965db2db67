"""
Job catalog with cached loading.

Jobs come from a seeded YAML file or any other loader; the catalog keeps the
last good result and serves it while a reload is failing.
"""

from typing import Callable, List, Tuple
import logging
import os

import yaml

from .cache import TTLCache
from .models import JobContext

logger = logging.getLogger(__name__)

JobLoader = Callable[[], List[JobContext]]


def load_job_file(path: str) -> List[JobContext]:
    """
    Load a YAML list of job records.

    Args:
        path: Path to a YAML file containing a list of jobs, or a mapping with a 'jobs' key

    Returns:
        List of validated JobContext objects

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file does not hold a list of jobs
        pydantic.ValidationError: If a job record is invalid
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Job catalog file not found: {path}")

    with open(path, 'r') as f:
        data = yaml.safe_load(f)

    if isinstance(data, dict):
        data = data.get("jobs")
    if not isinstance(data, list):
        raise ValueError(f"Job catalog {path} must contain a list of jobs")

    return [JobContext.model_validate(record) for record in data]


class JobCatalog:
    """Serves jobs from a loader through a TTL cache."""

    def __init__(self, loader: JobLoader, cache: TTLCache, key: str = "jobs"):
        """
        Initialize job catalog.

        Args:
            loader: Callable returning the current list of jobs
            cache: Cache holding the last loaded list
            key: Cache key for this catalog
        """
        self.loader = loader
        self.cache = cache
        self.key = key

    def get_jobs(self) -> Tuple[JobContext, ...]:
        """
        Return cached jobs, reloading once the cache entry expires.

        Returns:
            Immutable tuple of JobContext objects, shared with the cache

        Raises:
            Exception: Whatever the loader raised, when no stale copy exists
        """
        cached = self.cache.get(self.key)
        if cached is not None:
            logger.debug(f"Returning {len(cached)} cached jobs")
            return cached

        try:
            jobs = tuple(self.loader())
        except Exception as e:
            stale = self.cache.get_stale(self.key)
            if stale is None:
                raise
            logger.warning(f"Returning stale cached jobs due to load error: {e}")
            return stale

        self.cache.set(self.key, jobs)
        logger.info(f"Loaded and cached {len(jobs)} jobs")
        return jobs

    def refresh(self) -> Tuple[JobContext, ...]:
        """Drop the cached list and load again."""
        self.cache.invalidate(self.key)
        return self.get_jobs()
