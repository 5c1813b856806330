"""
Steering Wheel Reversal Rate (SWRR) Module
Markkula & Engström (2006), standardised as SAE J2944.
Inputs are validated with Pydantic v2 models.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import numpy as np
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from swrr.core import ReversalDetection, SteeringSignal
from swrr.exceptions import InvalidArgumentError
from swrr.metrics.base import MetricStrategy
from swrr.processing import SignalProcessor
from swrr.reversals import detect_reversals


class SWRRConfig(BaseModel):
    """
    Analysis settings for one reversal rate.
    Paper recommendations: gap 3 deg / 0.6 Hz for visual load,
    gap 0.1 deg / 2 Hz for cognitive load.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    gap_size_deg: float = Field(..., description="Minimum excursion counted as a reversal (deg)")
    cutoff_hz: Optional[float] = Field(None, gt=0, description="Low pass cutoff, None = unfiltered")
    resample_rate_hz: Optional[float] = Field(None, gt=0, description="None = recorded rate")
    filter_order: int = Field(2, ge=1, description="Butterworth filter order")


class SWRRInput(BaseModel):
    """
    Input data model for SWRR validation.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, allow_inf_nan=False)

    angle_deg: np.ndarray = Field(..., description="Steering wheel angle in degrees")
    sample_rate_hz: float = Field(..., gt=0, description="Sample rate of angle_deg in Hz")

    @field_validator("angle_deg", mode="before")
    @classmethod
    def as_signal(cls, v: Any) -> np.ndarray:
        try:
            arr = np.asarray(v, dtype=float)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Steering signal must be numeric: {e}") from e
        if arr.ndim != 1:
            raise ValueError("Steering signal must be one-dimensional")
        if len(arr) < 2:
            raise ValueError("Steering signal needs at least 2 samples")
        if not np.all(np.isfinite(arr)):
            raise ValueError("Steering signal contains NaN or infinite samples")
        return arr


@dataclass
class SWRRDiagnostics:
    """Everything a plot or debug report needs, computed once"""

    signal: SteeringSignal
    detection: ReversalDetection
    config: SWRRConfig
    rate_per_min: float

    def summary(self) -> Dict[str, Any]:
        return {
            "sample_rate_hz": self.signal.sample_rate,
            "gap_size_deg": self.config.gap_size_deg,
            "cutoff_hz": self.config.cutoff_hz,
            "filter_order": self.config.filter_order,
            "resample_rate_hz": self.signal.conditioned_sample_rate,
            "duration_s": self.signal.duration_s,
            "n_extrema": len(self.detection.extrema),
            "n_upward": len(self.detection.upward),
            "n_downward": len(self.detection.downward),
            "swrr_per_min": self.rate_per_min,
        }


Observer = Callable[[SWRRDiagnostics], None]


def make_config(
    gap_size: float,
    cutoff: Optional[float] = None,
    resample_rate: Optional[float] = None,
    filter_order: int = 2,
) -> SWRRConfig:
    try:
        return SWRRConfig(
            gap_size_deg=gap_size,
            cutoff_hz=cutoff,
            resample_rate_hz=resample_rate,
            filter_order=filter_order,
        )
    except ValidationError as e:
        raise InvalidArgumentError(str(e)) from e


def calculate_swrr(angle_deg, sample_rate: float, config: SWRRConfig) -> SWRRDiagnostics:
    """
    Conditions the signal, detects reversals and normalises to reversals/min.

    The rate is taken over the elapsed time of the recording,
    (n_samples - 1) / sample_rate.
    """
    # 1. Input Validation
    try:
        data = SWRRInput(angle_deg=angle_deg, sample_rate_hz=sample_rate)
    except ValidationError as e:
        raise InvalidArgumentError(str(e)) from e

    # 2. Resampling + low pass filtering
    sig = SignalProcessor.process(
        data.angle_deg,
        data.sample_rate_hz,
        resample_rate=config.resample_rate_hz,
        cutoff=config.cutoff_hz,
        filter_order=config.filter_order,
    )

    # 3. Reversal detection
    detection = detect_reversals(sig.conditioned_angle_deg, config.gap_size_deg)

    # 4. Normalisation (reversals per minute)
    rate = detection.count / sig.duration_s * 60

    diagnostics = SWRRDiagnostics(
        signal=sig, detection=detection, config=config, rate_per_min=float(rate)
    )
    logger.debug(f"SWRR computed: {diagnostics.summary()}")
    return diagnostics


def compute_swrr_detailed(
    angle_deg,
    sample_rate: float,
    gap_size: float,
    cutoff: Optional[float] = None,
    resample_rate: Optional[float] = None,
    filter_order: int = 2,
) -> SWRRDiagnostics:
    """Same as compute_swrr, but returns the conditioned signal, extrema and pairs too"""
    config = make_config(gap_size, cutoff, resample_rate, filter_order)
    return calculate_swrr(angle_deg, sample_rate, config)


def compute_swrr(
    angle_deg,
    sample_rate: float,
    gap_size: float,
    cutoff: Optional[float] = None,
    resample_rate: Optional[float] = None,
    filter_order: int = 2,
    observer: Optional[Observer] = None,
) -> float:
    """
    Steering wheel reversals per minute.

    :param angle_deg: steering wheel angle samples (deg)
    :param sample_rate: sample rate of angle_deg (Hz)
    :param gap_size: minimum excursion counted as a reversal (deg)
    :param cutoff: low pass cutoff (Hz); None skips filtering
    :param resample_rate: resample to this rate first (Hz); None keeps sample_rate
    :param filter_order: Butterworth order of the low pass filter
    :param observer: called with the SWRRDiagnostics, e.g. a plotter
    """
    diagnostics = compute_swrr_detailed(
        angle_deg, sample_rate, gap_size, cutoff, resample_rate, filter_order
    )
    if observer is not None:
        observer(diagnostics)
    return diagnostics.rate_per_min


class ReversalRate(MetricStrategy):
    """
    SWRR as a pipeline metric.
    Each instance conditions the raw signal with its own settings.
    """

    def __init__(
        self,
        gap_size_deg: float,
        cutoff_hz: Optional[float] = None,
        resample_rate_hz: Optional[float] = None,
        filter_order: int = 2,
        label: str = "SWRR",
        observer: Optional[Observer] = None,
    ):
        super().__init__(label=label)
        self.config = make_config(gap_size_deg, cutoff_hz, resample_rate_hz, filter_order)
        self.observer = observer

    @classmethod
    def from_config(cls, config: SWRRConfig, label: str = "SWRR", observer=None):
        return cls(
            gap_size_deg=config.gap_size_deg,
            cutoff_hz=config.cutoff_hz,
            resample_rate_hz=config.resample_rate_hz,
            filter_order=config.filter_order,
            label=label,
            observer=observer,
        )

    def calculate(self, sig: SteeringSignal) -> Dict[str, Any]:
        diagnostics = calculate_swrr(sig.raw_angle_deg, sig.sample_rate, self.config)
        if self.observer is not None:
            self.observer(diagnostics)

        return {
            f"{self.label}_per_min": round(diagnostics.rate_per_min, 2),
            f"{self.label}_N_reversals": diagnostics.detection.count,
        }
