from __future__ import annotations

from typing import Any, Dict, List, Literal

from pydantic import BaseModel, Field


class FilterItem(BaseModel):
    # 'date' filters are applied by the caller before the schedule reaches us.
    type: Literal["stat", "date"] = "stat"
    category: str = ""
    operator: Literal[">", "<", ">=", "<=", "="] = ">="
    value: float = 0.0


class SortConfig(BaseModel):
    key: str = "pts"
    direction: Literal["asc", "desc"] = "desc"


class LeaderboardQueryRequest(BaseModel):
    mode: Literal["Players", "Teams"] = "Players"
    activeFilters: List[FilterItem] = Field(default_factory=list)
    sortConfig: SortConfig = Field(default_factory=SortConfig)
    selectedTeams: List[str] = Field(default_factory=list)
    selectedPositions: List[str] = Field(default_factory=list)
    searchQuery: str = ""


class LeaderboardRequest(BaseModel):
    # Same camelCase shapes the roster/schedule collaborator produces.
    teams: List[Dict[str, Any]] = Field(default_factory=list)
    schedule: List[Dict[str, Any]] = Field(default_factory=list)
    query: LeaderboardQueryRequest = Field(default_factory=LeaderboardQueryRequest)
