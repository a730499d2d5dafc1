# src/minutes_analytics/domains/analytics/models.py
"""
Pydantic models for analytics report responses.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


# -------------------------
# Shared
# -------------------------

class EntityRef(BaseModel):
    """An (id, name) pair for an involved department or team."""
    id: str
    name: Optional[str] = None


class PriorityCounts(BaseModel):
    urgent: int = 0
    important: int = 0
    medium: int = 0
    low: int = 0


class PriorityAverages(BaseModel):
    """Per-priority mean hours; None means the bucket had no tasks."""
    urgent: Optional[float] = None
    important: Optional[float] = None
    medium: Optional[float] = None
    low: Optional[float] = None


# -------------------------
# Task progress & closure time
# -------------------------

class TaskDistribution(BaseModel):
    total: int = 0
    completed: int = 0
    in_progress: int = 0
    todo: int = 0
    completed_percent: float = 0.0
    in_progress_percent: float = 0.0
    todo_percent: float = 0.0


class PeriodActivity(BaseModel):
    created_count: int = 0
    completed_count: int = 0


class OverdueTaskSample(BaseModel):
    id: str
    title: Optional[str] = None
    due_date: str


class OverdueSummary(BaseModel):
    count: int = 0
    most_overdue_sample: List[OverdueTaskSample] = Field(default_factory=list)


class TaskProgressStats(BaseModel):
    distribution: TaskDistribution = Field(default_factory=TaskDistribution)
    period_activity: PeriodActivity = Field(default_factory=PeriodActivity)
    overdue: OverdueSummary = Field(default_factory=OverdueSummary)
    priority_breakdown: PriorityCounts = Field(default_factory=PriorityCounts)


class TaskClosureTimeStats(BaseModel):
    overall_average_hours: float = 0.0
    by_priority: PriorityAverages = Field(default_factory=PriorityAverages)


class WeightedClosureStats(BaseModel):
    weighted_average_hours: float = 0.0
    by_priority: PriorityAverages = Field(default_factory=PriorityAverages)


# -------------------------
# Teams
# -------------------------

class TeamClosureMetric(BaseModel):
    team_id: str
    team_name: Optional[str] = None
    city_id: Optional[str] = None
    department_id: Optional[str] = None
    completed_tasks: int = 0
    average_close_hours: float = 0.0
    overdue_tasks: int = 0


class TeamSupportMetric(BaseModel):
    team_id: str
    team_name: Optional[str] = None
    city_id: Optional[str] = None
    department_id: Optional[str] = None
    critical_issues: int = 0
    average_close_hours: float = 0.0
    overdue_tasks: int = 0


# -------------------------
# Departments
# -------------------------

class DepartmentClosureMetric(BaseModel):
    department_id: str
    department_name: str
    completed_tasks: int = 0
    average_close_hours: float = 0.0
    median_close_hours: float = 0.0
    overdue_tasks: int = 0


# -------------------------
# Cities
# -------------------------

class CityTaskSummary(BaseModel):
    total_tasks: int = 0
    completed_tasks: int = 0
    in_progress_tasks: int = 0
    todo_tasks: int = 0
    overdue_tasks: int = 0


class CitySLAMetrics(BaseModel):
    average_time_to_close_hours: float = 0.0
    median_time_to_close_hours: float = 0.0
    distribution_by_priority: PriorityAverages = Field(default_factory=PriorityAverages)


class DepartmentInCityMetrics(BaseModel):
    department_id: str
    department_name: str
    total_tasks: int = 0
    completed_tasks: int = 0
    overdue_tasks: int = 0
    average_close_time_hours: float = 0.0


class CityOverview(BaseModel):
    summary: CityTaskSummary = Field(default_factory=CityTaskSummary)
    priority_distribution: PriorityCounts = Field(default_factory=PriorityCounts)
    sla_metrics: CitySLAMetrics = Field(default_factory=CitySLAMetrics)
    department_breakdown: List[DepartmentInCityMetrics] = Field(default_factory=list)


# -------------------------
# Goals
# -------------------------

class GoalRef(BaseModel):
    id: str
    title: Optional[str] = None
    status: Optional[str] = None
    department_id: Optional[str] = None


class GoalDetail(GoalRef):
    description: Optional[str] = None
    year: Optional[int] = None
    quarter: Optional[int] = None


class CityGoalProgress(BaseModel):
    goal: GoalRef
    total_tasks: int = 0
    completed_tasks: int = 0
    progress_percent: float = 0.0


class GoalSummary(BaseModel):
    goal: GoalDetail
    total_tasks: int = 0
    completed_tasks: int = 0
    at_risk_tasks: int = 0
    progress_percent: float = 0.0


# -------------------------
# Meetings
# -------------------------

class MeetingSummary(BaseModel):
    meeting_id: str
    meeting_title: Optional[str] = None
    date: Optional[str] = None
    status: Optional[str] = None
    total_tasks: int = 0
    completed_tasks: int = 0
    open_tasks: int = 0
    critical_issues: int = 0
    departments_involved: List[EntityRef] = Field(default_factory=list)
    teams_involved: List[EntityRef] = Field(default_factory=list)


class MeetingStatusTally(BaseModel):
    total_meetings: int = 0
    processing: int = 0
    completed: int = 0
    failed: int = 0


class MeetingComplianceStats(BaseModel):
    summary: MeetingStatusTally = Field(default_factory=MeetingStatusTally)
    meetings: List[MeetingSummary] = Field(default_factory=list)


# -------------------------
# Precomputed (RPC) summaries
# -------------------------

class CityTasksOverview(BaseModel):
    city_id: str
    city_name: Optional[str] = None
    total_tasks: int = 0
    todo_tasks: int = 0
    in_progress_tasks: int = 0
    completed_tasks: int = 0
    overdue_tasks: int = 0
    completion_rate: float = 0.0


class DepartmentProgress(BaseModel):
    city_id: Optional[str] = None
    city_name: Optional[str] = None
    department_id: str
    department_name: Optional[str] = None
    total_tasks: int = 0
    todo_tasks: int = 0
    in_progress_tasks: int = 0
    completed_tasks: int = 0
    overdue_tasks: int = 0
    completion_rate: float = 0.0
    avg_completion_time_hours: Optional[float] = None


class ClosureTimeByPriority(BaseModel):
    priority: str
    priority_weight: int = 0
    total_completed: int = 0
    avg_closure_hours: Optional[float] = None
    min_closure_hours: Optional[float] = None
    max_closure_hours: Optional[float] = None
    median_closure_hours: Optional[float] = None


class WeightedAvgClosureTime(BaseModel):
    weighted_avg_hours: float = 0.0
    total_tasks: int = 0
    urgent_contribution: float = 0.0
    important_contribution: float = 0.0
    medium_contribution: float = 0.0
    low_contribution: float = 0.0


class ClosureTimeByLocation(BaseModel):
    city_id: Optional[str] = None
    city_name: Optional[str] = None
    department_id: Optional[str] = None
    department_name: Optional[str] = None
    total_completed: int = 0
    avg_closure_hours: Optional[float] = None
    min_closure_hours: Optional[float] = None
    max_closure_hours: Optional[float] = None
    median_closure_hours: Optional[float] = None
    urgent_avg_hours: Optional[float] = None
    important_avg_hours: Optional[float] = None
    medium_avg_hours: Optional[float] = None
    low_avg_hours: Optional[float] = None


class ClosureTimeByCity(BaseModel):
    city_id: str
    city_name: Optional[str] = None
    total_completed: int = 0
    avg_closure_hours: Optional[float] = None
    median_closure_hours: Optional[float] = None
    urgent_avg_hours: Optional[float] = None
    important_avg_hours: Optional[float] = None
    medium_avg_hours: Optional[float] = None
    low_avg_hours: Optional[float] = None


# -------------------------
# Dashboard
# -------------------------

class AnalyticsDashboard(BaseModel):
    """The headline reports for one scope and window, fetched together."""
    task_progress: TaskProgressStats
    weighted_closure: WeightedClosureStats
    teams_needing_support: List[TeamSupportMetric] = Field(default_factory=list)
    department_closure: List[DepartmentClosureMetric] = Field(default_factory=list)
    goals: List[GoalSummary] = Field(default_factory=list)
    meeting_compliance: MeetingComplianceStats
