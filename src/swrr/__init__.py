"""Steering Wheel Reversal Rate (SWRR) analysis."""

from swrr.exceptions import (
    FilterParamsNotPrecalculatedWarning,
    InvalidArgumentError,
    ResamplingToSlowerRateWarning,
    SWRRError,
    SWRRWarning,
)
from swrr.filters import FilterCoefficients, get_butterworth_filter
from swrr.processing import SignalProcessor
from swrr.reversals import detect_reversals, find_extrema, find_upward_reversals
from swrr.metrics.reversal_rate import (
    ReversalRate,
    SWRRConfig,
    SWRRDiagnostics,
    compute_swrr,
    compute_swrr_detailed,
)
from swrr.pipeline import SteeringAnalysisPipeline

__version__ = "1.0.0"
