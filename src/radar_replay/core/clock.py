"""
Playback Clock

A single virtual time cursor shared by every entity, plus the discrete
commands an operator can issue against it.

State machine over {running, paused}:
- toggle_pause: running <-> paused
- reset: time = 0, pause state unchanged
- step_forward / step_backward: time +/- step, pause state unchanged
- change_speed: step +/- increment (fine near zero, coarse above)
- tick: time += step unless paused
"""

import logging
from dataclasses import dataclass, field
from enum import Enum

logger = logging.getLogger(__name__)


class PlaybackCommand(Enum):
    """Operator commands; each maps 1:1 to a clock transition."""

    RESET = "reset"
    SPEED_UP = "speed_up"
    SPEED_DOWN = "speed_down"
    STEP_FORWARD = "step_forward"
    STEP_BACKWARD = "step_backward"
    TOGGLE_PAUSE = "toggle_pause"


@dataclass
class SpeedControl:
    """Increment schedule for ``PlaybackClock.change_speed``."""

    fine_threshold: float = 0.01
    fine_increment: float = 0.002
    coarse_increment: float = 0.01

    def increment_for(self, step: float) -> float:
        return self.fine_increment if abs(step) <= self.fine_threshold else self.coarse_increment


@dataclass
class PlaybackClock:
    """
    Virtual playback time.

    Attributes:
        time: Current cursor in recording time units
        step: Signed advance per tick; negative plays backwards
        paused: Suppresses automatic advancement in ``tick``
        speed: Increment schedule used by ``change_speed``
    """

    time: float = 0.0
    step: float = 0.01
    paused: bool = False
    speed: SpeedControl = field(default_factory=SpeedControl)

    @property
    def running(self) -> bool:
        return not self.paused

    def tick(self) -> None:
        """Advance once per scheduling pass unless paused."""
        if self.paused:
            return
        self.time += self.step

    def reset(self) -> None:
        self.time = 0.0

    def step_forward(self) -> None:
        self.time += self.step

    def step_backward(self) -> None:
        self.time -= self.step

    def toggle_pause(self) -> None:
        self.paused = not self.paused

    def change_speed(self, direction: int) -> None:
        """
        Nudge ``step`` up (direction > 0) or down (direction < 0).

        The increment depends on the current magnitude, and the sign of
        ``step`` is whatever the arithmetic produces; stepping down through
        zero reverses playback.
        """
        if direction == 0:
            return
        delta = self.speed.increment_for(self.step)
        self.step += delta if direction > 0 else -delta

    def apply(self, command: PlaybackCommand) -> None:
        """Dispatch an operator command to its transition."""
        if command is PlaybackCommand.RESET:
            self.reset()
        elif command is PlaybackCommand.SPEED_UP:
            self.change_speed(+1)
        elif command is PlaybackCommand.SPEED_DOWN:
            self.change_speed(-1)
        elif command is PlaybackCommand.STEP_FORWARD:
            self.step_forward()
        elif command is PlaybackCommand.STEP_BACKWARD:
            self.step_backward()
        elif command is PlaybackCommand.TOGGLE_PAUSE:
            self.toggle_pause()
        else:
            raise ValueError(f"Unknown playback command: {command!r}")
        logger.debug("%s -> %s", command.name, self.describe())

    def describe(self) -> str:
        state = "paused" if self.paused else "running"
        return f"time={self.time:.3f} step={self.step:+.3f} ({state})"
