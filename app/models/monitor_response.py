# =============================================================================
# File: monitor_response.py
# Date: 2026-10-18
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ActivityLogItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    timestamp: int = Field(..., description="Epoch milliseconds.")
    from_lang: str = Field(..., alias="from")
    to_lang: str = Field(..., alias="to")
    source: str
    translated: str


class MonitorLogsResponse(BaseModel):
    logs: List[ActivityLogItem] = Field(default_factory=list)
    count: int = Field(0)


class MonitorStatsResponse(BaseModel):
    total_entries: int = Field(0, alias="totalEntries")
    last_minute: int = Field(0, alias="lastMinute")
    oldest_entry: Optional[int] = Field(None, alias="oldestEntry")
    newest_entry: Optional[int] = Field(None, alias="newestEntry")
    retention_minutes: float = Field(..., alias="retentionMinutes")
    server_uptime: float = Field(..., alias="serverUptime")
    engine: Dict[str, Any] = Field(default_factory=dict)
    pending_loads: List[str] = Field(default_factory=list, alias="pendingLoads")
    performance: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(populate_by_name=True)
