"""
Time estimator for progress tracking.
Estimates remaining time from the running average time per step.
"""

from datetime import datetime, timedelta
from typing import Optional

UNKNOWN_DURATION = "--:--:--"
UNKNOWN_CLOCK_TIME = "--:--"


class TimeEstimator:
    """Running-average timing model for a fixed number of steps"""

    def __init__(self):
        self.start_time: Optional[datetime] = None
        self.average_time_per_step: Optional[timedelta] = None
        self.estimated_remaining: Optional[timedelta] = None
        self.estimated_finish: Optional[datetime] = None

    def start(self, now: datetime):
        """Call when processing starts"""
        self.start_time = now
        self.average_time_per_step = None
        self.estimated_remaining = None
        self.estimated_finish = None

    def update(self, current_step: int, total_steps: int, now: datetime) -> Optional[timedelta]:
        """
        Recompute the estimates after ``current_step`` of ``total_steps``.

        Returns the estimated remaining time, or None while no step has
        been recorded yet.
        """
        if self.start_time is None:
            raise RuntimeError("TimeEstimator.update() called before start()")

        if current_step <= 0:
            return None

        elapsed = now - self.start_time
        self.average_time_per_step = elapsed / current_step
        self.estimated_remaining = self.average_time_per_step * (total_steps - current_step)
        self.estimated_finish = now + self.estimated_remaining

        return self.estimated_remaining

    def get_elapsed(self, now: datetime) -> timedelta:
        """Get elapsed time since start"""
        if self.start_time is None:
            return timedelta(0)
        return now - self.start_time

    @staticmethod
    def format_duration(duration: Optional[timedelta]) -> str:
        """Format a duration as HH:MM:SS; hours are not wrapped at 24."""
        if duration is None or duration < timedelta(0):
            return UNKNOWN_DURATION

        total_seconds = int(duration.total_seconds())
        minutes, seconds = divmod(total_seconds, 60)
        hours, minutes = divmod(minutes, 60)
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}"

    @staticmethod
    def format_clock(moment: Optional[datetime]) -> str:
        """Format a point in time as HH:MM."""
        if moment is None:
            return UNKNOWN_CLOCK_TIME
        return moment.strftime("%H:%M")
