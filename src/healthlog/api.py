"""healthlog API server for dashboards."""

from datetime import date
from typing import Any

import structlog
from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from healthlog import __version__
from healthlog.adapters.base import AdapterError
from healthlog.aggregators.insights import generate_insights
from healthlog.aggregators.streaks import calculate_habit_streak, calculate_streak, dedupe_logs
from healthlog.aggregators.summary import DailyLogAggregator
from healthlog.aggregators.trends import calculate_weekly_averages, calculate_weekly_trends
from healthlog.config.settings import settings
from healthlog.dates import local_today
from healthlog.models.daily_log import DailyLog, DailyLogSettings

logger = structlog.get_logger()

app = FastAPI(
    title="healthlog API",
    description="Streaks, trends and insights for daily health logs",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.api.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class LogsRequest(BaseModel):
    """Logs posted by a client, in any order."""

    logs: list[DailyLog] = Field(default_factory=list)
    today: date | None = None


class SummaryRequest(LogsRequest):
    settings: DailyLogSettings | None = None


class StreakRequest(LogsRequest):
    habit: str | None = None


def _today(requested: date | None) -> date:
    return requested or local_today(settings.timezone)


@app.get("/api/status")
async def get_status() -> dict[str, Any]:
    """Liveness check."""
    return {"status": "ok", "version": __version__}


@app.post("/api/summary")
async def post_summary(request: SummaryRequest) -> dict[str, Any]:
    """Summarize posted logs."""
    aggregator = DailyLogAggregator(request.logs, request.settings)
    return aggregator.get_summary(_today(request.today))


@app.get("/api/summary")
async def get_summary(
    target_date: date | None = Query(
        None,
        alias="date",
        description="Day to summarize (YYYY-MM-DD). Defaults to today.",
    ),
    user: str | None = Query(None, description="Only logs owned by this user"),
) -> dict[str, Any]:
    """Summarize logs from the configured export file."""
    from healthlog.adapters.json_export import load_daily_logs

    today = _today(target_date)
    try:
        data = await load_daily_logs(user_id=user, today=today)
    except AdapterError as e:
        logger.error("Failed to load daily logs", error=str(e))
        raise HTTPException(status_code=503, detail=str(e)) from e

    summary = DailyLogAggregator(data["logs"], data["settings"]).get_summary(today)
    summary["skipped"] = data["skipped"]
    return summary


@app.post("/api/streak")
async def post_streak(request: StreakRequest) -> dict[str, Any]:
    """Completion streak, or a habit's streak when ``habit`` is given."""
    today = _today(request.today)
    if request.habit:
        streak = calculate_habit_streak(request.logs, request.habit, today)
    else:
        streak = calculate_streak(request.logs, today)
    return {"streak": streak, "habit": request.habit, "date": today.isoformat()}


@app.post("/api/trends")
async def post_trends(request: LogsRequest) -> dict[str, Any]:
    """Weekly averages and trend badges."""
    averages = calculate_weekly_averages(request.logs, _today(request.today))
    trends = calculate_weekly_trends(averages)
    return {
        "weekly_averages": averages.model_dump(),
        "trends": {name: trend.model_dump() for name, trend in trends.items()},
    }


@app.post("/api/insights")
async def post_insights(request: LogsRequest) -> dict[str, Any]:
    """Insights over the last week of posted logs."""
    logs = sorted(dedupe_logs(request.logs), key=lambda log: log.day)
    return {"insights": generate_insights(logs)}
