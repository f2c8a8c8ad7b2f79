"""
stepper.py — Step-by-Step Playback Cursor
=========================================
The Stepper is the ONLY object a UI interacts with during playback.  It
holds a finished trace (a list of frames) read-only and moves an index
over it.  Nothing is recomputed per step: every move is a list lookup,
so seeking backwards is as cheap as seeking forwards.

State machine:
    IDLE     →  load()      →  PAUSED
    PAUSED   →  play()      →  PLAYING
    PLAYING  →  pause()     →  PAUSED
    PLAYING  →  (last frame reached) → FINISHED
    any      →  reset()     →  IDLE

The cursor is always clamped to [0, len(steps) - 1].

Thread safety:
  This class is NOT thread-safe.  Drive it from a single thread (the
  request handler, or the UI's timer callback).
"""

import time
from enum import Enum
from typing import Any, Callable, Optional, Sequence


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class StepperState(Enum):
    IDLE     = "idle"
    PAUSED   = "paused"
    PLAYING  = "playing"
    FINISHED = "finished"


# ---------------------------------------------------------------------------
# Speed presets (seconds per step)
# ---------------------------------------------------------------------------
SPEED_PRESETS = {
    "slow":   2.5,    # teaching mode
    "medium": 1.5,
    "fast":   0.6,
    "turbo":  0.2,
}


# ---------------------------------------------------------------------------
# Stepper
# ---------------------------------------------------------------------------
class Stepper:
    """
    Attributes:
        state       : Current StepperState.
        steps       : The loaded trace (never modified).
        current_idx : Index into `steps` that is currently displayed (-1 when idle).
        speed       : Seconds between auto-advance ticks.
        on_step     : Optional callback(frame) fired every time the current frame changes.
    """

    def __init__(self, on_step: Optional[Callable[[Any], None]] = None, speed: str = "medium"):
        self.steps:       Sequence[Any] = ()
        self.current_idx: int           = -1
        self.state:       StepperState  = StepperState.IDLE
        self.speed:       float         = SPEED_PRESETS.get(speed, SPEED_PRESETS["medium"])
        self.on_step:     Optional[Callable[[Any], None]] = on_step

        self._last_tick:  float = 0.0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def load(self, steps: Sequence[Any], index: int = 0) -> None:
        """Attach a finished trace and show frame `index` (clamped)."""
        self.steps = tuple(steps)
        if not self.steps:
            self.reset()
            return
        self.state = StepperState.PAUSED
        self._goto(self._clamp(index))
        if self.at_end:
            self.state = StepperState.FINISHED

    def reset(self) -> None:
        """Back to IDLE — caller must load() again."""
        self.steps       = ()
        self.current_idx = -1
        self.state       = StepperState.IDLE

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def next_step(self) -> bool:
        """Advance one frame.  Returns False if already at the end."""
        if not self.steps:
            return False
        if self.at_end:
            self.state = StepperState.FINISHED
            return False
        self._goto(self.current_idx + 1)
        if self.at_end:
            self.state = StepperState.FINISHED
        return True

    def prev_step(self) -> bool:
        """Rewind one frame.  Returns False if already at the start."""
        if self.current_idx <= 0:
            return False
        self._goto(self.current_idx - 1)
        if self.state == StepperState.FINISHED:
            self.state = StepperState.PAUSED
        return True

    def goto_step(self, idx: int) -> int:
        """Jump to frame `idx`, clamped into range.  Returns the index landed on."""
        if not self.steps:
            return -1
        self._goto(self._clamp(idx))
        if self.at_end:
            self.state = StepperState.FINISHED
        elif self.state == StepperState.FINISHED:
            self.state = StepperState.PAUSED
        return self.current_idx

    def rewind(self) -> None:
        """Jump back to frame 0."""
        self.goto_step(0)

    def jump_to_end(self) -> None:
        """Jump to the final frame."""
        self.goto_step(len(self.steps) - 1)

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self) -> None:
        if self.state in (StepperState.FINISHED, StepperState.IDLE):
            return
        self.state      = StepperState.PLAYING
        self._last_tick = time.monotonic()

    def pause(self) -> None:
        if self.state == StepperState.PLAYING:
            self.state = StepperState.PAUSED

    def toggle_play(self) -> None:
        if self.state == StepperState.PLAYING:
            self.pause()
        else:
            self.play()

    # ------------------------------------------------------------------
    # Tick  (call this from your event loop / timer)
    # ------------------------------------------------------------------
    def tick(self, now: Optional[float] = None) -> bool:
        """
        Call periodically (e.g. every 50 ms).  If playing and enough
        time has elapsed, advances one frame.  Returns True if a frame
        was taken.
        """
        if self.state != StepperState.PLAYING:
            return False
        now = time.monotonic() if now is None else now
        if now - self._last_tick < self.speed:
            return False
        self._last_tick = now
        return self.next_step()

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, preset: str) -> None:
        self.speed = SPEED_PRESETS.get(preset, SPEED_PRESETS["medium"])

    def set_speed_value(self, seconds: float) -> None:
        self.speed = max(0.05, seconds)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def current_step(self) -> Optional[Any]:
        if 0 <= self.current_idx < len(self.steps):
            return self.steps[self.current_idx]
        return None

    @property
    def total_steps(self) -> int:
        return len(self.steps)

    @property
    def at_end(self) -> bool:
        return bool(self.steps) and self.current_idx == len(self.steps) - 1

    @property
    def is_finished(self) -> bool:
        return self.state == StepperState.FINISHED

    @property
    def is_playing(self) -> bool:
        return self.state == StepperState.PLAYING

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _clamp(self, idx: int) -> int:
        return max(0, min(idx, len(self.steps) - 1))

    def _goto(self, idx: int) -> None:
        self.current_idx = idx
        if self.on_step is not None:
            self.on_step(self.steps[idx])
