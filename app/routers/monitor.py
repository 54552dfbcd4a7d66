# =============================================================================
# File: monitor.py
# Date: 2026-10-18
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

from typing import Optional

from fastapi import APIRouter, Query

from app.app_state import TranslationState
from app.dependencies.state import STATE_DEP
from app.models.monitor_response import (
    ActivityLogItem,
    MonitorLogsResponse,
    MonitorStatsResponse,
)
from app.utils.performance_tracker import perf_tracker

router = APIRouter()

LIMIT_QUERY = Query(None, description="Number of recent entries to return.")


@router.get("/monitor/logs", response_model=MonitorLogsResponse)
async def recent_logs(
    limit: Optional[int] = LIMIT_QUERY, state: TranslationState = STATE_DEP
) -> MonitorLogsResponse:
    """Recent translations, oldest first."""
    settings = state.settings.activity_log
    # Missing or non-positive limits fall back to the default, as the original UI expects.
    if not limit or limit <= 0:
        limit = settings.default_limit
    limit = min(limit, settings.max_limit)

    entries = state.activity_log.recent(limit)
    return MonitorLogsResponse(
        logs=[ActivityLogItem(**entry.to_dict()) for entry in entries],
        count=len(entries),
    )


@router.get("/monitor/stats", response_model=MonitorStatsResponse, response_model_by_alias=True)
async def stats(state: TranslationState = STATE_DEP) -> MonitorStatsResponse:
    log_stats = state.activity_log.stats()
    return MonitorStatsResponse(
        total_entries=log_stats["total_entries"],
        last_minute=log_stats["last_minute_count"],
        oldest_entry=log_stats["oldest_timestamp"],
        newest_entry=log_stats["newest_timestamp"],
        retention_minutes=state.settings.activity_log.retention_seconds / 60,
        server_uptime=state.uptime_seconds,
        engine=state.slot.get_stats(),
        pending_loads=state.coordinator.pending_keys,
        performance=perf_tracker.get_all_stats(),
    )


@router.post("/monitor/clear")
async def clear_logs(state: TranslationState = STATE_DEP) -> dict:
    state.activity_log.clear()
    return {"success": True}
