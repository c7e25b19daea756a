"""
Stimulus Module

Classes:
    StimulusKind: Enumeration of the stimuli that can be applied to the worm
    Stimulus:     A stimulus of a given kind and strength
"""

import math
from dataclasses import dataclass
from enum        import Enum

class StimulusKind(Enum):
    TOUCH_HEAD = "touch_head"
    TOUCH_TAIL = "touch_tail"
    SMELL_FOOD = "smell_food"
    NONE       = "none"

    @classmethod
    def parse(cls, value: 'str | StimulusKind') -> 'StimulusKind':
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower().replace('-', '_'))
        except ValueError:
            raise ValueError(f"Unknown stimulus kind: {value!r}") from None

@dataclass(frozen=True)
class Stimulus:
    """
    Simulator input. 'strength' is the probability that any given sensory
    neuron picks the stimulus up.
    """
    kind    : StimulusKind
    strength: float = 1.0

    def __post_init__(self):
        strength = float(self.strength)
        if math.isnan(strength) or not 0.0 <= strength <= 1.0:
            raise ValueError(f"Stimulus strength must lie in [0, 1], got {self.strength}")
        object.__setattr__(self, 'strength', strength)
        object.__setattr__(self, 'kind', StimulusKind.parse(self.kind))
