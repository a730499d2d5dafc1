# src/minutes_analytics/domains/analytics/constants.py
"""
Analytics Domain Constants
"""

from ...core.models import MeetingStatus, TaskPriority

# Priorities, highest first
PRIORITIES = [p.value for p in TaskPriority]

# Weighted-average weights; anything not listed (including None) weighs 0
PRIORITY_WEIGHTS = {
    "urgent": 4,
    "important": 3,
    "medium": 2,
    "low": 1,
}

# Bucket used by breakdown histograms when a task has no priority
DEFAULT_BREAKDOWN_PRIORITY = "medium"

# Transcript extraction payload priorities ("1" highest) -> stored priority
EXTRACTION_PRIORITY_MAP = {
    "1": "urgent",
    "2": "important",
    "3": "medium",
    "4": "low",
    "5": "low",
}

# Meeting processing statuses tallied by the compliance report
MEETING_STATUSES = [s.value for s in MeetingStatus]

# Grouping key / display name for tasks without a department
UNKNOWN_DEPARTMENT_KEY = "unknown"
UNKNOWN_DEPARTMENT_NAME = "Unknown"

# Stored procedures behind the precomputed summary reports
RPC_TASKS_BY_CITY = "get_tasks_by_city"
RPC_CITY_DEPARTMENT_PROGRESS = "get_city_department_progress"
RPC_CLOSURE_TIME_BY_PRIORITY = "get_task_closure_time_by_priority"
RPC_WEIGHTED_AVG_CLOSURE_TIME = "get_weighted_avg_closure_time"
RPC_CLOSURE_TIME_BY_LOCATION = "get_closure_time_by_location"
RPC_CLOSURE_TIME_BY_CITY = "get_closure_time_by_city"
