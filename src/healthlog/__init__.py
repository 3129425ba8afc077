"""healthlog - streaks, trends and insights for daily health logs."""

__version__ = "0.1.0"
