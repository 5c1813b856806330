"""
Steering Analysis Pipeline Manager.
Runs several metrics (e.g. visual and cognitive SWRR presets) on one recording.
"""

from typing import List, Dict, Any, Optional
from loguru import logger
from swrr.processing import SignalProcessor
from swrr.metrics.base import MetricStrategy


class SteeringAnalysisPipeline:
    def __init__(self):
        self.metrics: List[MetricStrategy] = []

    def add_metric(self, metric: MetricStrategy):
        self.metrics.append(metric)
        return self

    def run(self, angle_deg, sample_rate: float, name: Optional[str] = None) -> Dict[str, Any]:
        """
        Wraps the recording once, then computes every registered metric.

        A failing metric is reported as "Error_<label>" and the others still run.
        """
        # 1. Raw signal container (each metric does its own conditioning)
        signal = SignalProcessor.process(angle_deg, sample_rate)

        results: Dict[str, Any] = {
            "signal_obj": signal,
            "Duration_s": round(signal.duration_s, 3),
        }
        if name is not None:
            results["Recording"] = name

        # 2. Metric Calculation
        #    metrics are independent; result keys are prefixed with their label
        for metric in self.metrics:
            try:
                results.update(metric.calculate(signal))
            except Exception as e:
                logger.error(f"{metric.label} failed on {name or 'recording'}: {e}")
                results[f"Error_{metric.label}"] = str(e)

        return results
