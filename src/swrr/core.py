"""
Core data structures for steering reversal analysis.
"""

from dataclasses import dataclass, field
from typing import List, Tuple
import numpy as np

ReversalPair = Tuple[int, int]


@dataclass
class SteeringSignal:
    """
    Steering wheel angle container, raw and conditioned.
    Every metric works on this one object.
    """

    time_s: np.ndarray  # original time stamps (s)
    raw_angle_deg: np.ndarray  # recorded angle (deg)
    conditioned_time_s: np.ndarray  # time stamps after resampling (s)
    conditioned_angle_deg: np.ndarray  # resampled + low pass filtered (deg)
    sample_rate: float  # original sample rate (Hz)
    conditioned_sample_rate: float  # rate after resampling (Hz)

    @property
    def duration_s(self) -> float:
        """Elapsed time between first and last recorded sample (seconds)"""
        return (len(self.raw_angle_deg) - 1) / self.sample_rate

    @property
    def dt(self) -> float:
        """Time step of the conditioned signal (seconds)"""
        return 1.0 / self.conditioned_sample_rate


@dataclass
class ReversalDetection:
    """Extrema and reversal pairs found in one conditioned signal."""

    extrema: np.ndarray
    upward: List[ReversalPair] = field(default_factory=list)
    downward: List[ReversalPair] = field(default_factory=list)

    @property
    def reversals(self) -> List[ReversalPair]:
        # upward pairs first, then downward, as detected
        return self.upward + self.downward

    @property
    def count(self) -> int:
        return len(self.upward) + len(self.downward)
