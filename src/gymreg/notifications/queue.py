"""Job queue producers.

Only the enqueue side lives here. Jobs are consumed by a separate
`rq worker` process pointed at the same Redis instance and queue name.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from redis import Redis
from rq import Queue

from gymreg.logging import sanitize_for_log

logger = logging.getLogger(__name__)

DEFAULT_JOB_TIMEOUT = "5m"
DEFAULT_RESULT_TTL = 3600  # Keep result for 1 hour
# Seconds a request may wait on Redis to connect or answer
DEFAULT_SOCKET_TIMEOUT = 2.0


class JobQueue(Protocol):
    """Interface for submitting background jobs."""

    def add(self, key: str, payload: dict[str, Any]) -> None:
        """Submit a job identified by key. The outcome is never observed."""
        ...


class RQJobQueue:
    """JobQueue backed by rq and Redis.

    The job key is the dotted import path of the job callable, which rq
    resolves inside the worker process.
    """

    def __init__(
        self,
        redis_url: str,
        queue_name: str = "default",
        job_timeout: str = DEFAULT_JOB_TIMEOUT,
        result_ttl: int = DEFAULT_RESULT_TTL,
        socket_timeout: float = DEFAULT_SOCKET_TIMEOUT,
    ) -> None:
        self.redis_url = redis_url
        self.queue_name = queue_name
        self.job_timeout = job_timeout
        self.result_ttl = result_ttl
        self.socket_timeout = socket_timeout
        self._queue: Queue | None = None

    @property
    def queue(self) -> Queue:
        """Get or create the rq queue. Connecting is deferred to first use."""
        if self._queue is None:
            connection = Redis.from_url(
                self.redis_url,
                socket_connect_timeout=self.socket_timeout,
                socket_timeout=self.socket_timeout,
            )
            self._queue = Queue(self.queue_name, connection=connection)
            logger.info(
                "Connected job queue '%s' at %s",
                self.queue_name,
                sanitize_for_log(self.redis_url),
            )
        return self._queue

    def add(self, key: str, payload: dict[str, Any]) -> None:
        job = self.queue.enqueue(
            key,
            payload,
            job_timeout=self.job_timeout,
            result_ttl=self.result_ttl,
        )
        logger.debug("Enqueued job %s (%s)", job.id, key)

    def close(self) -> None:
        """Release the Redis connection pool."""
        if self._queue is not None:
            self._queue.connection.close()
            self._queue = None
