"""
Terminal progress bar with ETA estimation.

The bar owns the last line of its output stream and redraws it in place
with a carriage return. Log lines written through ``ProgressBar.log`` are
printed above the bar. Other writers to the same stream will garble the
display; the bar does not guard against that.

Example:
    with ProgressBar(total_steps=len(files), label="Copying") as bar:
        for path in files:
            copy(path)
            bar.advance()
"""

import logging
import sys
from datetime import datetime, timedelta
from typing import Callable, Iterable, Iterator, Optional, TextIO, TypeVar

from ..error_handler import InvalidArgumentError, MissingArgumentError
from .time_estimator import TimeEstimator

logger = logging.getLogger(__name__)

T = TypeVar("T")

BAR_BRACKET = "|"
EMPTY_BLOCK = " "
FILLED_BLOCK = "█"

SECTION_OPEN = "["
SECTION_CLOSE = "]"
SECTION_SEPARATOR = "|"


class ProgressBar:
    """
    Fixed-width progress bar for a known number of steps.

    Rendered as::

        Progress:  75%|████████  |[3/4] [14:02|14:05|00:00:57]

    The trailing section holds the start time, the estimated finish time and
    the average time per step. Timing values show placeholders until the
    first step is recorded.
    """

    def __init__(
        self,
        total_steps: int,
        bar_width: int = 25,
        label: str = "Progress",
        stream: Optional[TextIO] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        if total_steps < 0:
            raise InvalidArgumentError(
                "total_steps", f"Invalid value of total steps: {total_steps}", total_steps
            )
        if bar_width < 1:
            raise InvalidArgumentError(
                "bar_width", f"Invalid bar width: {bar_width}", bar_width
            )
        if label is None:
            raise MissingArgumentError("label")

        self._total_steps = total_steps
        self._bar_width = bar_width
        self._label = label
        self._stream = stream if stream is not None else sys.stdout
        self._clock = clock
        self._current_step = 0
        self._closed = False

        self._estimator = TimeEstimator()
        self._estimator.start(clock())

        self._write(self.render())

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def total_steps(self) -> int:
        return self._total_steps

    @property
    def current_step(self) -> int:
        return self._current_step

    @property
    def bar_width(self) -> int:
        return self._bar_width

    @property
    def label(self) -> str:
        return self._label

    @property
    def start_time(self) -> datetime:
        return self._estimator.start_time

    @property
    def average_time_per_step(self) -> Optional[timedelta]:
        return self._estimator.average_time_per_step

    @property
    def estimated_remaining(self) -> Optional[timedelta]:
        return self._estimator.estimated_remaining

    @property
    def estimated_finish(self) -> Optional[datetime]:
        return self._estimator.estimated_finish

    @property
    def percentage(self) -> float:
        """Completion in percent. A bar with no steps counts as complete."""
        if self._total_steps == 0:
            return 100.0
        return 100.0 * self._current_step / self._total_steps

    @property
    def filled_blocks(self) -> int:
        if self._total_steps == 0:
            return self._bar_width
        filled = round(self._bar_width * self._current_step / self._total_steps)
        return min(max(filled, 0), self._bar_width)

    @property
    def closed(self) -> bool:
        return self._closed

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _bar(self) -> str:
        filled = self.filled_blocks
        return (
            BAR_BRACKET
            + FILLED_BLOCK * filled
            + EMPTY_BLOCK * (self._bar_width - filled)
            + BAR_BRACKET
        )

    def _steps_section(self) -> str:
        return f"{SECTION_OPEN}{self._current_step}/{self._total_steps}{SECTION_CLOSE}"

    def _timing_section(self) -> str:
        fields = (
            TimeEstimator.format_clock(self.start_time),
            TimeEstimator.format_clock(self.estimated_finish),
            TimeEstimator.format_duration(self.average_time_per_step),
        )
        return SECTION_OPEN + SECTION_SEPARATOR.join(fields) + SECTION_CLOSE

    def render(self) -> str:
        """Return the bar as text without writing it anywhere."""
        return (
            f"{self._label}: {round(self.percentage):3d}%"
            f"{self._bar()}{self._steps_section()} {self._timing_section()}"
        )

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return (
            f"ProgressBar(label={self._label!r}, "
            f"current_step={self._current_step}, total_steps={self._total_steps})"
        )

    # ------------------------------------------------------------------
    # Interactions
    # ------------------------------------------------------------------

    def _write(self, text: str) -> None:
        self._stream.write(text)
        self._stream.flush()

    def advance(self, steps: int = 1) -> None:
        """
        Record ``steps`` more completed steps and redraw the bar in place.

        Ignored once the bar is closed.
        """
        if steps < 0:
            raise InvalidArgumentError("steps", f"Invalid value of steps: {steps}", steps)
        if self._closed:
            logger.debug(f"Ignoring advance of {self._label} after close")
            return

        self._current_step = min(self._total_steps, self._current_step + steps)
        self._estimator.update(self._current_step, self._total_steps, self._clock())

        self._write("\r" + self.render())

    def log(self, value) -> None:
        """Print ``value`` on its own line above the bar, or plainly once closed."""
        if value is None:
            raise MissingArgumentError("value")
        if self._closed:
            self._write(f"{value}\n")
            return

        rendered = self.render()
        self._write("\r" + " " * len(rendered) + "\r" + f"{value}\n" + rendered)

    def close(self) -> None:
        """Release the terminal line. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self._write("\n")
        logger.debug(
            f"{self._label} finished at {self._current_step}/{self._total_steps} "
            f"after {self._estimator.get_elapsed(self._clock())}"
        )

    def __enter__(self) -> "ProgressBar":
        return self

    def __exit__(self, exc_type, exc_value, tb) -> None:
        self.close()


def track(
    items: Iterable[T],
    label: str = "Progress",
    bar_width: int = 25,
    stream: Optional[TextIO] = None,
    total: Optional[int] = None,
) -> Iterator[T]:
    """
    Yield from ``items`` while advancing a progress bar one step per item.

    ``total`` defaults to ``len(items)``. The bar is closed when the loop
    ends, including when it is broken off or raises.
    """
    if items is None:
        raise MissingArgumentError("items")
    if total is None:
        try:
            total = len(items)
        except TypeError:
            raise InvalidArgumentError(
                "total", "total is required for iterables without a length"
            ) from None

    with ProgressBar(total, bar_width=bar_width, label=label, stream=stream) as bar:
        for item in items:
            yield item
            bar.advance()
