"""
Visualisation of a reversal rate calculation.

ReversalPlotter can be passed as the observer of compute_swrr or of a
ReversalRate metric; it only reads the diagnostics it is given.
"""

from typing import Optional

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.figure import Figure

from swrr.metrics.reversal_rate import SWRRDiagnostics


def _plot_pairs(ax, diag: SWRRDiagnostics, **style):
    t = diag.signal.conditioned_time_s
    y = diag.signal.conditioned_angle_deg
    for i, (start, end) in enumerate(diag.detection.reversals):
        ax.plot(
            [t[start], t[end]],
            [y[start], y[end]],
            "o-k",
            label="reversals" if i == 0 else None,
            **style,
        )


def plot_debug(diag: SWRRDiagnostics, fig: Optional[Figure] = None) -> Figure:
    """
    Top: raw samples, conditioned signal and reversal pairs.
    Bottom: first difference and the stationary points found in it.
    """
    if fig is None:
        fig = plt.figure(figsize=(12, 8))
    fig.clf()
    axs = fig.subplots(2, 1, sharex=True)
    sig = diag.signal

    # (1) Angle
    axs[0].plot(sig.time_s, sig.raw_angle_deg, "x", markersize=8, label="raw data")
    axs[0].plot(
        sig.conditioned_time_s, sig.conditioned_angle_deg, "c-", linewidth=2, label="filtered data"
    )
    _plot_pairs(axs[0], diag, markersize=10, linewidth=2)
    axs[0].set_ylabel("Steering wheel angle [deg]")
    axs[0].grid(True)
    axs[0].legend()

    # (2) Derivative
    d = np.concatenate(([0.0], np.diff(sig.conditioned_angle_deg)))
    extrema = diag.detection.extrema
    axs[1].plot(sig.conditioned_time_s, d, ".", markersize=5, label="derivative")
    axs[1].plot(
        sig.conditioned_time_s[extrema], d[extrema], "ok", linewidth=2, label="stationary points"
    )
    axs[1].set_xlabel("Time [s]")
    axs[1].grid(True)
    axs[1].legend()
    axs[1].set_title(f"Obtained reversal rate: {diag.rate_per_min:.1f} reversals / minute")

    return fig


def plot_nice(diag: SWRRDiagnostics, fig: Optional[Figure] = None) -> Figure:
    """Single panel for papers and slides"""
    if fig is None:
        fig = plt.figure(figsize=(12, 6))
    fig.clf()
    ax = fig.subplots()
    sig = diag.signal

    ax.plot(sig.time_s, sig.raw_angle_deg, "k+", markersize=10, label="Raw steering wheel angle data")
    ax.plot(
        sig.conditioned_time_s,
        sig.conditioned_angle_deg,
        "k-",
        linewidth=1,
        label="Filtered steering wheel signal",
    )
    _plot_pairs(ax, diag, markersize=15, linewidth=2)
    ax.grid(True)
    ax.set_xlabel("Time (s)")
    ax.set_ylabel("Steering wheel angle (degrees)")
    ax.legend(loc="best")
    return fig


class ReversalPlotter:
    """Observer drawing every calculation it is notified about"""

    def __init__(self, nice: bool = False, title: Optional[str] = None):
        self.nice = nice
        self.title = title
        self.figures = []

    def __call__(self, diag: SWRRDiagnostics) -> None:
        fig = plot_nice(diag) if self.nice else plot_debug(diag)
        if self.title:
            fig.suptitle(self.title)
        self.figures.append(fig)
