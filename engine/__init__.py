"""
engine/
-------
Playback layer.

    from engine import Stepper, StepperState, SPEED_PRESETS
"""

from engine.stepper import Stepper, StepperState, SPEED_PRESETS

__all__ = [
    "Stepper",
    "StepperState",
    "SPEED_PRESETS",
]
