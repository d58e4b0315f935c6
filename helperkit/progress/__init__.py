# Progress tracking utilities
from .time_estimator import TimeEstimator, UNKNOWN_CLOCK_TIME, UNKNOWN_DURATION
from .bar import ProgressBar, track

__all__ = [
    'TimeEstimator',
    'UNKNOWN_CLOCK_TIME',
    'UNKNOWN_DURATION',
    'ProgressBar',
    'track',
]
