"""Common interface for places daily logs are read from."""

from abc import ABC, abstractmethod
from datetime import date, timedelta
from typing import Any

import structlog

from healthlog.config.settings import settings

logger = structlog.get_logger()


class BaseAdapter(ABC):
    """A source of one user's daily logs.

    Subclasses provide:
    - connect(): locate the source, returning False when it is unavailable
    - disconnect(): release it
    - health_check(): whether the source can still be read
    - fetch(): logs and settings for an inclusive range of days
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._connected = False
        self.logger = logger.bind(adapter=name)

    @property
    def is_connected(self) -> bool:
        return self._connected

    @abstractmethod
    async def connect(self) -> bool:
        """Open the source; False when it does not exist."""

    @abstractmethod
    async def disconnect(self) -> None:
        """Release the source."""

    @abstractmethod
    async def health_check(self) -> bool:
        """Whether the source is still readable."""

    @abstractmethod
    async def fetch(
        self,
        start_date: date,
        end_date: date | None = None,
        **kwargs: Any,
    ) -> dict[str, Any]:
        """Fetch logs dated within ``[start_date, end_date]``.

        Args:
            start_date: First day to include.
            end_date: Last day to include (defaults to start_date).
            **kwargs: Adapter-specific options.

        Returns:
            Dictionary with at least ``logs``, ``settings`` and ``skipped``.
        """

    async def fetch_today(self, today: date | None = None) -> dict[str, Any]:
        """Fetch only today's log."""
        today = today or date.today()
        return await self.fetch(today, today)

    async def fetch_history(
        self, today: date | None = None, days: int | None = None
    ) -> dict[str, Any]:
        """Fetch the last ``days`` days of logs up to and including today."""
        today = today or date.today()
        days = days or settings.export.history_days
        return await self.fetch(today - timedelta(days=days), today)

    async def __aenter__(self) -> "BaseAdapter":
        await self.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.disconnect()


class AdapterError(Exception):
    """Failure reading from a log source."""

    def __init__(self, adapter_name: str, message: str) -> None:
        self.adapter_name = adapter_name
        self.message = message
        super().__init__(f"[{adapter_name}] {message}")


class FetchError(AdapterError):
    """The source exists but its logs could not be read."""
