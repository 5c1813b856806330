"""
Base interface for all steering metrics.
Strategy Pattern implementation.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any
from swrr.core import SteeringSignal


class MetricStrategy(ABC):
    """Parent class of every steering metric"""

    # metric settings (gap size, cutoff, ...) are passed as keyword arguments
    def __init__(self, **kwargs):
        self.params = kwargs

    @property
    def label(self) -> str:
        return self.params.get("label") or self.__class__.__name__

    @abstractmethod
    def calculate(self, signal: SteeringSignal) -> Dict[str, Any]:
        """Takes the recorded signal, returns the results as a dict"""
        pass
