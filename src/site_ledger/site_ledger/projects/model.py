from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import ProjectStatus


@dataclass(frozen=True)
class Project:
    """A construction site whose money flows are tracked separately."""

    project_id: int
    name: str
    status: ProjectStatus = ProjectStatus.ACTIVE
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class ProjectStatistics:
    """Lifetime figures of one project, across all recorded activity."""

    project_id: int
    total_workers: int
    completed_days: int
    material_purchases: int
    total_income: Decimal
    total_expenses: Decimal
    current_balance: Decimal


@dataclass(frozen=True)
class ProjectOverview:
    project: Project
    statistics: ProjectStatistics


@dataclass(frozen=True)
class StatsSummary:
    """Headline counts for the dashboard."""

    total_projects: int
    active_projects: int
    total_workers: int
    active_workers: int
    total_materials: int
    last_updated: datetime
    status: str = "operational"
