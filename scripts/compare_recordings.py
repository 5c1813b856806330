"""
Recording Comparison Script.

Applies the two analyses recommended by Markkula & Engström (2006) to every
steering recording in a file (e.g. baseline, visual task and cognitive task
driving) and prints the resulting reversal rates side by side:

    - large reversals: gap size 3 deg, 0.6 Hz low pass (visual load)
    - small reversals: gap size 0.1 deg, 2 Hz low pass (cognitive load)

Usage:
    python scripts/compare_recordings.py <recordings.csv|.tdms> [--sample-rate HZ] [--plot] [--nice]
"""

import argparse
import os
import sys

import matplotlib.pyplot as plt
import pandas as pd
from loguru import logger
from tqdm import tqdm

from swrr.config import settings, analysis_presets
from swrr.io import load_recordings
from swrr.metrics.reversal_rate import ReversalRate
from swrr.pipeline import SteeringAnalysisPipeline
from swrr.plotting import ReversalPlotter


def build_pipeline(plotter=None) -> SteeringAnalysisPipeline:
    pipeline = SteeringAnalysisPipeline()
    for name, config in analysis_presets().items():
        label = f"SWRR_{name}"
        pipeline.add_metric(ReversalRate.from_config(config, label=label, observer=plotter))
    return pipeline


def main():
    # 1. Arguments
    parser = argparse.ArgumentParser(description="Compare steering wheel reversal rates of recordings.")
    parser.add_argument("path", type=str, help="CSV (one column per recording) or TDMS file.")
    parser.add_argument("--sample-rate", type=float, default=None, help="Sample rate in Hz, if not in the file.")
    parser.add_argument("--channels", nargs="*", default=None, help="Only analyse these columns/channels.")
    parser.add_argument("--output", type=str, default=None, help="CSV summary path.")
    parser.add_argument("--plot", action="store_true", help="Plot each calculation.")
    parser.add_argument("--nice", action="store_true", help="Publication style plots (implies --plot).")

    if len(sys.argv) == 1:
        parser.print_help(sys.stderr)
        sys.exit(1)

    args = parser.parse_args()

    # 2. Logging
    os.makedirs(settings.LOG_DIR, exist_ok=True)
    logger.remove()
    logger.add(sys.stderr, level=settings.LOG_LEVEL)
    logger.add(os.path.join(settings.LOG_DIR, "compare_recordings.log"), level="DEBUG", rotation="10 MB")

    # 3. Load
    try:
        recordings = load_recordings(args.path, sample_rate=args.sample_rate, channels=args.channels)
    except (FileNotFoundError, ValueError) as e:
        logger.error(e)
        return

    if not recordings:
        logger.warning("No recordings found.")
        return

    # 4. Analyse
    plotter = ReversalPlotter(nice=args.nice) if (args.plot or args.nice) else None
    pipeline = build_pipeline(plotter)

    rows = []
    for rec in tqdm(recordings, desc="Analysing recordings"):
        if plotter is not None:
            plotter.title = rec.name
        res = pipeline.run(rec.angle_deg, rec.sample_rate, name=rec.name)
        res.pop("signal_obj")
        res["Sample_Rate_Hz"] = rec.sample_rate
        rows.append(res)

    df = pd.DataFrame(rows).set_index("Recording")

    # 5. Report
    print("\n=== Steering Wheel Reversal Rates (reversals / minute) ===")
    print(df.to_string())

    output = args.output or os.path.join(
        settings.DATA_ROOT, f"{os.path.splitext(os.path.basename(args.path))[0]}_swrr.csv"
    )
    os.makedirs(os.path.dirname(output) or ".", exist_ok=True)
    df.to_csv(output)
    logger.info(f"Summary saved to {output}")

    if plotter is not None:
        plt.show()


if __name__ == "__main__":
    main()
