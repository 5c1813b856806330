"""
Unit Tests for Butterworth coefficient provisioning.

Run: pytest tests/test_filters.py -v
"""

import warnings

import numpy as np
import pytest
from scipy import signal

from swrr.exceptions import FilterParamsNotPrecalculatedWarning, InvalidArgumentError
from swrr.filters import (
    TABLE,
    FilterCoefficients,
    get_butterworth_filter,
    lookup_precomputed,
)


# =============================================================================
# TABLE LOOKUP
# =============================================================================

class TestPrecomputedTable:

    def test_visual_preset_is_returned_verbatim(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            coeffs = get_butterworth_filter(2, 30, 0.6)

        assert coeffs.numerator == (0.00362168151493, 0.00724336302986, 0.00362168151493)
        assert coeffs.denominator == (1.0, -1.82269492519631, 0.83718165125602)

    def test_rounded_wn_matches_within_tolerance(self):
        # 1 / 15 is stored as 0.06666666666667
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            coeffs = get_butterworth_filter(2, 30, 1)

        assert coeffs.numerator == (0.00952576237620, 0.01905152475239, 0.00952576237620)
        assert coeffs.denominator == (1.0, -1.70555214554408, 0.74365519504887)

    def test_same_ratio_gives_same_entry(self):
        assert get_butterworth_filter(2, 100, 2) is get_butterworth_filter(2, 30, 0.6)

    def test_scaled_numerator(self):
        coeffs = get_butterworth_filter(5, 100, 2)
        raw = [0.08042356421933, 0.40211782109667, 0.80423564219334,
               0.80423564219334, 0.40211782109667, 0.08042356421933]
        assert coeffs.numerator == tuple(1e-5 * v for v in raw)
        assert coeffs.order == 5

    def test_high_pass_entry(self):
        coeffs = get_butterworth_filter(2, 30, 0.3, "high")
        assert coeffs.numerator == (0.95654322555688, -1.91308645111375, 0.95654322555688)
        assert get_butterworth_filter(2, 30, 0.3, "highpass") is coeffs

    def test_tolerance_boundary(self):
        assert lookup_precomputed(2, 0.04 + 5e-15, "low") is not None
        assert lookup_precomputed(2, 0.04 + 2e-14, "low") is None
        assert lookup_precomputed(3, 0.04, "low") is None

    def test_every_entry_is_well_formed(self):
        for (btype, order), rows in TABLE.items():
            for wn, coeffs in rows:
                assert 0 < wn < 1
                assert len(coeffs.numerator) == order + 1
                assert len(coeffs.denominator) == order + 1
                assert coeffs.denominator[0] == 1.0

    def test_every_entry_has_unit_passband_gain(self):
        for (btype, order), rows in TABLE.items():
            for wn, coeffs in rows:
                b, a = coeffs.as_arrays()
                if btype == "low":
                    gain = b.sum() / a.sum()
                else:
                    alt = (-1.0) ** np.arange(order + 1)
                    gain = (b * alt).sum() / (a * alt).sum()
                assert gain == pytest.approx(1.0, rel=1e-6), (btype, order, wn)

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            TABLE[("low", 2)] = ()

    def test_as_arrays_returns_copies(self):
        coeffs = get_butterworth_filter(2, 30, 0.6)
        b, _ = coeffs.as_arrays()
        b[0] = 99.0
        assert coeffs.numerator[0] == 0.00362168151493


# =============================================================================
# FALLBACK DESIGN
# =============================================================================

class TestFallbackDesign:

    def test_unknown_configuration_warns_and_designs(self):
        with pytest.warns(FilterParamsNotPrecalculatedWarning, match="not precalculated"):
            coeffs = get_butterworth_filter(3, 50, 1.7)

        b, a = signal.butter(3, 1.7 / 25)
        np.testing.assert_allclose(coeffs.numerator, b)
        np.testing.assert_allclose(coeffs.denominator, a)
        assert isinstance(coeffs, FilterCoefficients)

    def test_near_miss_uses_fallback_even_when_silenced(self):
        table_coeffs = get_butterworth_filter(2, 30, 0.6)

        with warnings.catch_warnings():
            warnings.simplefilter("ignore", FilterParamsNotPrecalculatedWarning)
            coeffs = get_butterworth_filter(2, 30, 0.6 + 1e-9)

        assert coeffs != table_coeffs
        b, a = signal.butter(2, (0.6 + 1e-9) / 15)
        np.testing.assert_allclose(coeffs.numerator, b)
        np.testing.assert_allclose(coeffs.denominator, a)

    def test_warning_carries_design_parameters(self):
        with pytest.warns(FilterParamsNotPrecalculatedWarning) as record:
            get_butterworth_filter(2, 50, 3.3, "high")

        message = str(record[0].message)
        assert "Wn=" in message
        assert "b=" in message and "a=" in message


# =============================================================================
# INVALID ARGUMENTS
# =============================================================================

class TestInvalidArguments:

    @pytest.mark.parametrize("btype", ["band", "bandpass", "", None, 1])
    def test_unknown_band(self, btype):
        with pytest.raises(InvalidArgumentError):
            get_butterworth_filter(2, 30, 0.6, btype)

    def test_invalid_argument_is_a_value_error(self):
        with pytest.raises(ValueError):
            get_butterworth_filter(2, 30, 0.6, "notch")

    @pytest.mark.parametrize("order", [0, -1, 2.5, True])
    def test_invalid_order(self, order):
        with pytest.raises(InvalidArgumentError):
            get_butterworth_filter(order, 30, 0.6)

    @pytest.mark.parametrize("sample_rate, cutoff", [(0, 1), (-30, 1), (30, 0), (30, -1)])
    def test_non_positive_rates(self, sample_rate, cutoff):
        with pytest.raises(InvalidArgumentError):
            get_butterworth_filter(2, sample_rate, cutoff)

    def test_cutoff_above_nyquist(self):
        with pytest.raises(InvalidArgumentError, match="Nyquist"):
            get_butterworth_filter(2, 30, 20)
