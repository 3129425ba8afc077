"""Daily log sources for healthlog."""

from healthlog.adapters.base import AdapterError, BaseAdapter, FetchError
from healthlog.adapters.json_export import JsonExportAdapter, load_daily_logs

__all__ = [
    # Base
    "BaseAdapter",
    "AdapterError",
    "FetchError",
    # Adapters
    "JsonExportAdapter",
    # Convenience functions
    "load_daily_logs",
]
