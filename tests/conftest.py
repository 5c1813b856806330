"""
Pytest Configuration - Shared Fixtures
"""

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest


def triangle_wave(amplitude, period_s, n_periods, sample_rate):
    """Sawtooth between 0 and amplitude, starting at 0 and peaking mid-period"""
    n = int(round(n_periods * period_s * sample_rate)) + 1
    t = np.arange(n) / sample_rate
    phase = (t % period_s) / period_s
    return amplitude * (1 - np.abs(2 * phase - 1))


@pytest.fixture
def ramp_signal():
    """Two ramps: 0 -> 3 -> 0, then 0 -> 5 -> 0, sampled at 1 Hz"""
    return np.array([0, 1, 2, 3, 2, 1, 0, 1, 2, 3, 4, 5, 4, 3, 2, 1, 0], dtype=float)


@pytest.fixture
def jittery_sine():
    """60 s of slow 0.2 Hz steering (10 deg) with 8 Hz, 0.5 deg jitter at 30 Hz"""
    fs = 30.0
    t = np.arange(int(60 * fs) + 1) / fs
    angle = 10 * np.sin(2 * np.pi * 0.2 * t) + 0.5 * np.sin(2 * np.pi * 8 * t)
    return angle, fs


@pytest.fixture
def make_triangle():
    return triangle_wave
