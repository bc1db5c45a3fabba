# college_hockey/services/__init__.py
"""
Services package exports.
"""
from .poll_service import PollService
from .schedule_service import ScheduleService
from .scoreboard_service import ScoreboardService

__all__ = ["PollService", "ScheduleService", "ScoreboardService"]
