"""Service-layer helpers for the Weather.ly backend."""

from .forecast_outlook import ForecastOutlook
from .reminders import plan_reminders, reminder_key
from .window_planner import (
    WindowPlan,
    WindowPlanner,
    default_policy,
    default_work_hours,
)
from .window_store import WindowStore

__all__ = [
    "ForecastOutlook",
    "WindowPlan",
    "WindowPlanner",
    "WindowStore",
    "default_policy",
    "default_work_hours",
    "plan_reminders",
    "reminder_key",
]
