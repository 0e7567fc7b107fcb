"""
SLA External Integrations
=========================

- YAML SLA policy loader
- APScheduler wrapper for the background sweep
"""

from pathlib import Path
from typing import Awaitable, Callable, Optional

import yaml
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from pydantic import ValidationError

from helpdesk.core import ConfigurationException
from helpdesk.shared.infrastructure.logging import get_logger
from helpdesk.sla.application import ISLAPolicyProvider
from helpdesk.sla.domain import SLAPolicy

logger = get_logger(__name__)


class SLAConfigManager(ISLAPolicyProvider):
    """
    SLA policy loaded once from YAML.

    A missing file means the built-in P1-P4 windows. The policy is not
    reloaded while the process runs.
    """

    def __init__(self, path: Optional[Path] = None):
        self._path = Path(path) if path else None
        self._policy: Optional[SLAPolicy] = None

    def load(self) -> SLAPolicy:
        """Initial configuration load."""
        self._policy = self._load_from_file()
        logger.info(
            "SLA configuration loaded",
            extra={
                "path": str(self._path) if self._path else None,
                "sla_targets": self._policy.sla_targets,
                "warning_window_minutes": self._policy.warning_window_minutes,
            }
        )
        return self._policy

    def _load_from_file(self) -> SLAPolicy:
        if self._path is None or not self._path.exists():
            logger.warning(
                "SLA config file not found, using defaults",
                extra={"path": str(self._path) if self._path else None}
            )
            return SLAPolicy()

        with open(self._path, "r") as f:
            data = yaml.safe_load(f) or {}

        try:
            return SLAPolicy(**data)
        except (ValidationError, TypeError) as e:
            raise ConfigurationException(
                f"Invalid SLA configuration in {self._path}",
                {"errors": str(e)}
            ) from e

    def get_policy(self) -> SLAPolicy:
        if self._policy is None:
            return self.load()
        return self._policy


class SLAScheduler:
    """
    Wrapper for APScheduler for the background SLA sweep.

    Manages the lifecycle of the scheduler and its single job.
    """

    def __init__(self, interval_seconds: int = 300):
        self.interval_seconds = interval_seconds
        self._scheduler: Optional[AsyncIOScheduler] = None
        self._running = False

    async def start(self, job_func: Callable[[], Awaitable[None]]) -> None:
        """Start the scheduler with the given job function."""
        if self._running:
            logger.warning("SLA scheduler already running")
            return

        self._scheduler = AsyncIOScheduler()
        self._scheduler.add_job(
            job_func,
            "interval",
            seconds=self.interval_seconds,
            id="sla_sweep",
            name="SLA Sweep Job",
            misfire_grace_time=60,
            max_instances=1,
            replace_existing=True
        )
        self._scheduler.start()
        self._running = True

        logger.info(
            "SLA scheduler started",
            extra={"interval_seconds": self.interval_seconds}
        )

    async def stop(self) -> None:
        """Stop the scheduler; a running sweep is not awaited."""
        if not self._running:
            return

        if self._scheduler:
            self._scheduler.shutdown(wait=False)

        self._running = False
        logger.info("SLA scheduler stopped")

    @property
    def is_running(self) -> bool:
        return self._running
