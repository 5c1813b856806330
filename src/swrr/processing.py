"""
Steering signal conditioning: resampling and zero-phase low pass filtering.
"""

import warnings
from typing import Optional, Tuple

import numpy as np
from loguru import logger
from scipy import signal

from swrr.core import SteeringSignal
from swrr.exceptions import InvalidArgumentError, ResamplingToSlowerRateWarning
from swrr.filters import get_butterworth_filter


class SignalProcessor:
    """Signal conditioning only; no reversal logic lives here"""

    @staticmethod
    def process(
        angle_deg,
        sample_rate: float,
        resample_rate: Optional[float] = None,
        cutoff: Optional[float] = None,
        filter_order: int = 2,
    ) -> SteeringSignal:
        """
        Raw angle -> Resampling -> Low pass filtering (forward-backward)

        :param resample_rate: target rate in Hz, None keeps the recorded rate.
        :param cutoff: low pass cutoff in Hz, None leaves the signal unfiltered.
        """
        # 1. Input checks
        angle_deg = np.asarray(angle_deg, dtype=float)
        if angle_deg.ndim != 1:
            raise InvalidArgumentError("Steering signal must be one-dimensional")
        if len(angle_deg) < 2:
            raise InvalidArgumentError("Steering signal needs at least 2 samples")
        if not np.isfinite(sample_rate) or sample_rate <= 0:
            raise InvalidArgumentError(f"Sample rate must be positive and finite, got {sample_rate}")
        if resample_rate is None:
            resample_rate = sample_rate
        if not np.isfinite(resample_rate) or resample_rate <= 0:
            raise InvalidArgumentError(
                f"Resample rate must be positive and finite, got {resample_rate}"
            )

        time_s = np.arange(len(angle_deg)) / sample_rate

        # 2. Resampling (identity when the rate is unchanged)
        resampled_time_s, resampled_deg = SignalProcessor.resample(
            time_s, angle_deg, sample_rate, resample_rate
        )

        # 3. Low pass filtering on the resampled grid, so the cutoff is normalised
    #    by resample_rate
        if cutoff is None:
            conditioned_deg = resampled_deg
        else:
            conditioned_deg = SignalProcessor.apply_filter(
                resampled_deg, resample_rate, cutoff, filter_order
            )

        return SteeringSignal(
            time_s=time_s,
            raw_angle_deg=angle_deg,
            conditioned_time_s=resampled_time_s,
            conditioned_angle_deg=conditioned_deg,
            sample_rate=sample_rate,
            conditioned_sample_rate=resample_rate,
        )

    @staticmethod
    def resample(
        time_s: np.ndarray,
        angle_deg: np.ndarray,
        sample_rate: float,
        resample_rate: float,
    ) -> Tuple[np.ndarray, np.ndarray]:
        """Linear interpolation onto a resample_rate grid over the same duration"""
        if resample_rate == sample_rate:
            return time_s, angle_deg

        if resample_rate < sample_rate:
            warnings.warn(
                f"Resampling to slower sample rate ({sample_rate} Hz -> {resample_rate} Hz)",
                ResamplingToSlowerRateWarning,
                stacklevel=3,
            )

        duration_s = (len(angle_deg) - 1) / sample_rate
        # last grid point may not exceed the recording; tolerance absorbs rounding
        n_samples = int(np.floor(duration_s * resample_rate + 1e-9)) + 1
        if n_samples < 2:
            raise InvalidArgumentError(
                f"Resample rate {resample_rate} Hz leaves fewer than 2 samples "
                f"over {duration_s} s"
            )

        resampled_time_s = np.arange(n_samples) / resample_rate
        resampled_deg = np.interp(resampled_time_s, time_s, angle_deg)
        logger.debug(
            f"Resampled {len(angle_deg)} samples @ {sample_rate} Hz "
            f"-> {n_samples} samples @ {resample_rate} Hz"
        )
        return resampled_time_s, resampled_deg

    @staticmethod
    def apply_filter(
        data: np.ndarray, fs: float, cutoff: float, order: int = 2
    ) -> np.ndarray:
        """
        Zero-phase Butterworth low pass (filtfilt).
        Filtering forwards and then backwards cancels the phase delay, so
        extrema stay aligned with the direction changes of the raw signal.
        """
        b, a = get_butterworth_filter(order, fs, cutoff, "low").as_arrays()

        # odd extension of 3 * (filter length - 1) samples at both ends
        padlen = 3 * (max(len(a), len(b)) - 1)
        if len(data) <= padlen:
            raise InvalidArgumentError(
                f"Signal of {len(data)} samples is too short for an order {order} "
                f"filter (needs more than {padlen})"
            )
        return signal.filtfilt(b, a, data, padtype="odd", padlen=padlen)
