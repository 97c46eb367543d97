"""
Auto-scroll state machine.

Drives the autoplay mode of the question list. The state machine is
advanced by an external timer (a Gradio Timer in the app), so it holds no
timing logic of its own.

    IDLE --start--> SCROLLING --toggle_pause--> PAUSED
    PAUSED --toggle_pause--> SCROLLING
    any --stop--> IDLE
    SCROLLING --tick at last record--> IDLE (reached_end)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class ScrollState(str, Enum):
    """States of the auto-scroll machine."""

    IDLE = "idle"
    SCROLLING = "scrolling"
    PAUSED = "paused"


@dataclass
class AutoScroll:
    """
    Auto-scroll controller.

    Attributes:
        interval: Seconds between ticks
        interval_choices: Allowed interval values
        state: Current ScrollState
        position: Index of the first record in view
        reached_end: True once a tick found the last record in view
    """

    interval: int = 5
    interval_choices: Tuple[int, ...] = (2, 3, 5, 7, 10, 15)
    state: ScrollState = ScrollState.IDLE
    position: int = 0
    reached_end: bool = False

    @property
    def enabled(self) -> bool:
        """True while scrolling or paused."""
        return self.state != ScrollState.IDLE

    @property
    def paused(self) -> bool:
        return self.state == ScrollState.PAUSED

    @property
    def timer_active(self) -> bool:
        """Whether the driving timer should be ticking."""
        return self.state == ScrollState.SCROLLING

    def start(self, total: int) -> bool:
        """
        Start scrolling from the first record.

        Args:
            total: Number of records currently displayed

        Returns:
            True if scrolling started, False if there is nothing to scroll
            or scrolling is already enabled
        """
        if total <= 0 or self.enabled:
            return False

        self.position = 0
        self.reached_end = False
        self.state = ScrollState.SCROLLING
        return True

    def stop(self):
        """Stop scrolling from any state."""
        self.state = ScrollState.IDLE

    def toggle_pause(self) -> ScrollState:
        """Pause or resume; ignored while idle."""
        if self.state == ScrollState.SCROLLING:
            self.state = ScrollState.PAUSED
        elif self.state == ScrollState.PAUSED:
            self.state = ScrollState.SCROLLING
        return self.state

    def tick(self, total: int) -> bool:
        """
        Advance by one record.

        Args:
            total: Number of records currently displayed

        Returns:
            True if the position moved
        """
        if self.state != ScrollState.SCROLLING:
            return False

        if self.position >= total - 1:
            self.reached_end = True
            self.state = ScrollState.IDLE
            return False

        self.position += 1
        return True

    def set_interval(self, seconds: int):
        """
        Change the tick interval.

        Raises:
            ValueError: If scrolling is enabled or the value is not offered
        """
        if self.enabled:
            raise ValueError("Cannot change the interval while auto-scroll is running")

        if seconds not in self.interval_choices:
            raise ValueError(
                f"Invalid interval: {seconds}. Must be one of {list(self.interval_choices)}"
            )

        self.interval = seconds

    def reset_position(self):
        """Back to the first record; used when the displayed list changes."""
        self.position = 0
        self.reached_end = False

    def window(self, total: int, page_size: int) -> Tuple[int, int]:
        """
        Range of record indices in view.

        Returns:
            (start, end) slice bounds; the whole list while idle
        """
        if not self.enabled:
            return 0, total

        start = min(self.position, max(total - 1, 0))
        return start, min(start + page_size, total)
