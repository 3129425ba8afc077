"""Adapter for daily logs exported from the document store as JSON.

Two layouts are accepted:

- a list of log documents, each with its own ``id`` and ``userId``;
- an object ``{"userId": ..., "logs": ..., "settings": ...}`` where
  ``logs`` is a list of documents or a mapping of log id to document,
  mirroring ``users/{userId}/dailyLogs/{id}``.
"""

import json
from datetime import date
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from healthlog.adapters.base import BaseAdapter, FetchError
from healthlog.aggregators.streaks import dedupe_logs
from healthlog.config.settings import settings
from healthlog.models.daily_log import DailyLog, DailyLogSettings


class JsonExportAdapter(BaseAdapter):
    """Adapter for a local JSON export of daily logs.

    Fetches:
    - Daily logs for one user within a date range
    - The user's daily log settings, when exported
    """

    def __init__(self, path: Path | None = None, user_id: str | None = None) -> None:
        super().__init__("json_export")
        self.path = (path or settings.export.path).expanduser()
        self.user_id = settings.export.user_id if user_id is None else user_id

    async def connect(self) -> bool:
        """Connect to the export (verify the file exists)."""
        if not self.path.exists():
            self.logger.warning("Daily log export not found", path=str(self.path))
            return False

        if not self.path.is_file():
            self.logger.warning("Daily log export path is not a file", path=str(self.path))
            return False

        self._connected = True
        self.logger.info("Connected to daily log export", path=str(self.path))
        return True

    async def disconnect(self) -> None:
        """Disconnect from the export."""
        self._connected = False
        self.logger.info("Disconnected from daily log export")

    async def health_check(self) -> bool:
        """Check if the export file is still there."""
        return self.path.is_file()

    def _read(self) -> tuple[list[Any], dict[str, Any] | None]:
        """Read raw log documents and raw settings from the file."""
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except OSError as e:
            raise FetchError(self.name, f"Cannot read {self.path}: {e}") from e
        except json.JSONDecodeError as e:
            raise FetchError(self.name, f"Invalid JSON in {self.path}: {e}") from e

        if isinstance(raw, list):
            return raw, None

        if not isinstance(raw, dict) or "logs" not in raw:
            raise FetchError(self.name, "Expected a list of logs or an object with 'logs'")

        logs = raw["logs"]
        if isinstance(logs, dict):
            documents = [
                {"id": log_id, **doc} if isinstance(doc, dict) else doc
                for log_id, doc in logs.items()
            ]
        elif isinstance(logs, list):
            documents = logs
        else:
            raise FetchError(self.name, "'logs' must be a list or an object")

        # Documents nested under a user carry the owner from the path
        owner = raw.get("userId")
        if owner:
            for doc in documents:
                if isinstance(doc, dict):
                    doc.setdefault("userId", owner)

        return documents, raw.get("settings")

    def _parse_logs(self, documents: list[Any]) -> tuple[list[DailyLog], int]:
        """Validate documents, skipping the ones that fail."""
        logs = []
        skipped = 0
        for doc in documents:
            if not isinstance(doc, dict):
                self.logger.warning("Skipping non-object log document", value=repr(doc)[:50])
                skipped += 1
                continue
            try:
                log = DailyLog.model_validate(doc)
            except ValidationError as e:
                self.logger.warning(
                    "Skipping invalid daily log",
                    log_id=doc.get("id"),
                    errors=e.error_count(),
                    error=str(e),
                )
                skipped += 1
                continue

            if self.user_id and log.user_id != self.user_id:
                continue
            logs.append(log)

        return logs, skipped

    def _parse_settings(self, raw: dict[str, Any] | None) -> DailyLogSettings:
        if not raw:
            return DailyLogSettings()
        try:
            return DailyLogSettings.model_validate(raw)
        except ValidationError as e:
            self.logger.warning("Ignoring invalid daily log settings", error=str(e))
            return DailyLogSettings()

    async def fetch(
        self,
        start_date: date,
        end_date: date | None = None,
        **kwargs: Any,
    ) -> dict[str, Any]:
        """Fetch logs for a date range.

        Args:
            start_date: First day to include
            end_date: Last day to include (defaults to start_date)

        Returns:
            Dictionary with ``logs`` (oldest first, one per day),
            ``settings`` and the number of ``skipped`` documents.
        """
        if not self._connected:
            raise FetchError(self.name, "Not connected")

        end_date = end_date or start_date
        documents, raw_settings = self._read()
        logs, skipped = self._parse_logs(documents)

        in_range = [log for log in logs if start_date <= log.day <= end_date]
        in_range = sorted(dedupe_logs(in_range), key=lambda log: log.day)

        self.logger.info(
            "Fetched daily logs",
            start=start_date.isoformat(),
            end=end_date.isoformat(),
            logs=len(in_range),
            skipped=skipped,
        )
        return {
            "logs": in_range,
            "settings": self._parse_settings(raw_settings),
            "skipped": skipped,
        }


# Convenience function
async def load_daily_logs(
    path: Path | None = None,
    user_id: str | None = None,
    today: date | None = None,
    days: int | None = None,
) -> dict[str, Any]:
    """Load a user's recent logs and settings from the export file."""
    async with JsonExportAdapter(path, user_id) as adapter:
        if not adapter.is_connected:
            raise FetchError(adapter.name, f"Export file not found: {adapter.path}")
        return await adapter.fetch_history(today, days)
