"""
Butterworth filter coefficients for steering signal conditioning.

Frequently used designs are precomputed in data/butterworth_filters.json and
returned verbatim, so published reversal rates stay reproducible to the last
digit. Any other configuration is designed with scipy and flagged with a
FilterParamsNotPrecalculatedWarning carrying the numbers needed to add it to
the table.
"""

import json
import os
import warnings
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

import numpy as np
from loguru import logger
from scipy import signal

from swrr.exceptions import FilterParamsNotPrecalculatedWarning, InvalidArgumentError

CURRENT_DIR = os.path.dirname(os.path.abspath(__file__))
JSON_PATH = os.path.join(CURRENT_DIR, "data", "butterworth_filters.json")

# Different (sample rate, cutoff) pairs with the same ratio differ by rounding only
WN_TOLERANCE = 1e-14

BTYPES = {"low": "low", "lowpass": "low", "high": "high", "highpass": "high"}


@dataclass(frozen=True)
class FilterCoefficients:
    """Numerator (b) and denominator (a) of a digital IIR filter."""

    numerator: Tuple[float, ...]
    denominator: Tuple[float, ...]

    @property
    def order(self) -> int:
        return len(self.denominator) - 1

    def as_arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        """Fresh (b, a) arrays for scipy.signal"""
        return (
            np.array(self.numerator, dtype=float),
            np.array(self.denominator, dtype=float),
        )


TableKey = Tuple[str, int]
TableRows = Tuple[Tuple[float, FilterCoefficients], ...]


def load_table(path: str = JSON_PATH) -> Mapping[TableKey, TableRows]:
    """
    Reads the precomputed coefficient table.

    Rows are grouped by (btype, order) and hold (Wn, FilterCoefficients).
    An optional "scale" multiplies every numerator value, which keeps very
    small low pass gains readable in the JSON file.
    """
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)

    grouped = {}
    for entry in raw["filters"]:
        numerator = entry["b"]
        scale = entry.get("scale")
        if scale is not None:
            numerator = [scale * v for v in numerator]

        coeffs = FilterCoefficients(
            numerator=tuple(float(v) for v in numerator),
            denominator=tuple(float(v) for v in entry["a"]),
        )
        key = (BTYPES[entry["btype"]], int(entry["order"]))
        grouped.setdefault(key, []).append((float(entry["wn"]), coeffs))

    return MappingProxyType({k: tuple(rows) for k, rows in grouped.items()})


TABLE = load_table()


def normalized_cutoff(sample_rate: float, cutoff: float) -> float:
    """Cutoff relative to the Nyquist frequency"""
    return cutoff / (sample_rate / 2)


def lookup_precomputed(
    order: int, wn: float, btype: str = "low"
) -> Optional[FilterCoefficients]:
    for table_wn, coeffs in TABLE.get((btype, order), ()):
        if abs(wn - table_wn) < WN_TOLERANCE:
            return coeffs
    return None


def _check_band(btype) -> str:
    if not isinstance(btype, str) or btype.lower() not in BTYPES:
        raise InvalidArgumentError(f'Unexpected value "{btype}" for filter band.')
    return BTYPES[btype.lower()]


def _check_order(order) -> int:
    if isinstance(order, bool):
        raise InvalidArgumentError(f"Filter order must be a positive integer, got {order!r}")
    try:
        as_int = int(order)
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(
            f"Filter order must be a positive integer, got {order!r}"
        ) from e
    if as_int != order or as_int < 1:
        raise InvalidArgumentError(f"Filter order must be a positive integer, got {order!r}")
    return as_int


def get_butterworth_filter(
    order: int, sample_rate: float, cutoff: float, btype: str = "low"
) -> FilterCoefficients:
    """
    Butterworth filter of the given order and cutoff for a sampled signal.

    :param order: filter order (N)
    :param sample_rate: sample rate of the signal to be filtered (Hz)
    :param cutoff: cutoff frequency (Hz)
    :param btype: "low" (default) or "high"
    :raises InvalidArgumentError: unknown band, non-positive order/rate/cutoff,
        or a cutoff at or above the Nyquist frequency.
    """
    band = _check_band(btype)
    order = _check_order(order)
    if sample_rate <= 0:
        raise InvalidArgumentError(f"Sample rate must be positive, got {sample_rate}")
    if cutoff <= 0:
        raise InvalidArgumentError(f"Cutoff frequency must be positive, got {cutoff}")

    wn = normalized_cutoff(sample_rate, cutoff)

    coeffs = lookup_precomputed(order, wn, band)
    if coeffs is not None:
        logger.debug(f"Precomputed {band} pass filter: N={order}, Wn={wn}")
        return coeffs

    if not 0 < wn < 1:
        raise InvalidArgumentError(
            f"Cutoff {cutoff} Hz must lie below the Nyquist frequency "
            f"{sample_rate / 2} Hz (Wn={wn})"
        )

    b, a = signal.butter(order, wn, btype=band)
    coeffs = FilterCoefficients(
        numerator=tuple(float(v) for v in b),
        denominator=tuple(float(v) for v in a),
    )

    # Enough detail to paste a new entry into the table
    details = (
        f"btype={band}, order={order}, cutoff={cutoff}, Wn={wn!r}, "
        f"b={list(coeffs.numerator)}, a={list(coeffs.denominator)}"
    )
    warnings.warn(
        f"Butterworth filter parameters not precalculated ({details})",
        FilterParamsNotPrecalculatedWarning,
        stacklevel=2,
    )
    logger.debug(f"Designed Butterworth filter on the fly: {details}")
    return coeffs
