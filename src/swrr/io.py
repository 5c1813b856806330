"""
Steering recording loader.

CSV files hold one recording per column (plus an optional "time_s" column);
TDMS files hold one recording per channel, with the sample rate taken from
the waveform properties.
"""

import os
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd
from loguru import logger
from nptdms import TdmsFile

from swrr.exceptions import InvalidArgumentError

TIME_COLUMN = "time_s"


@dataclass
class Recording:
    name: str
    angle_deg: np.ndarray
    sample_rate: float


def _rate_from_time(time_s: np.ndarray) -> float:
    dt = np.median(np.diff(time_s))
    if not dt > 0:
        raise InvalidArgumentError("Time column must be strictly increasing")
    return float(1.0 / dt)


def load_csv(
    path: str,
    sample_rate: Optional[float] = None,
    channels: Optional[Sequence[str]] = None,
) -> List[Recording]:
    df = pd.read_csv(path)

    if TIME_COLUMN in df.columns:
        time_s = df[TIME_COLUMN].dropna().to_numpy(dtype=float)
        if sample_rate is None:
            sample_rate = _rate_from_time(time_s)
        df = df.drop(columns=[TIME_COLUMN])
    if sample_rate is None:
        raise InvalidArgumentError(
            f"{path}: no '{TIME_COLUMN}' column, pass sample_rate explicitly"
        )

    names = list(channels) if channels else list(df.columns)
    missing = [n for n in names if n not in df.columns]
    if missing:
        raise InvalidArgumentError(f"{path}: columns not found: {missing}")

    recordings = []
    for name in names:
        # columns of unequal length are padded with NaN by pandas
        values = pd.to_numeric(df[name], errors="coerce").dropna().to_numpy(dtype=float)
        if len(values) < 2:
            logger.warning(f"Column '{name}' in {path} has fewer than 2 samples, skipped")
            continue
        recordings.append(Recording(name=str(name), angle_deg=values, sample_rate=sample_rate))
    return recordings


def load_tdms(
    path: str,
    sample_rate: Optional[float] = None,
    channels: Optional[Sequence[str]] = None,
) -> List[Recording]:
    tdms_file = TdmsFile.read(path)

    recordings = []
    for group in tdms_file.groups():
        for channel in group.channels():
            if channels and channel.name not in channels:
                continue

            props = channel.properties
            fs = sample_rate
            if fs is None and "wf_increment" in props:
                fs = 1.0 / float(props["wf_increment"])
            if fs is None:
                try:
                    fs = _rate_from_time(channel.time_track())
                except (KeyError, ValueError) as e:
                    logger.warning(f"No sample rate for channel '{channel.name}': {e}")
                    continue

            values = np.asarray(channel[:], dtype=float)
            if len(values) < 2:
                logger.warning(f"Channel '{channel.name}' has fewer than 2 samples, skipped")
                continue
            recordings.append(Recording(name=channel.name, angle_deg=values, sample_rate=fs))

    if channels:
        found = {r.name for r in recordings}
        missing = [n for n in channels if n not in found]
        if missing:
            raise InvalidArgumentError(f"{path}: channels not found: {missing}")
    return recordings


def load_recordings(
    path: str,
    sample_rate: Optional[float] = None,
    channels: Optional[Sequence[str]] = None,
) -> List[Recording]:
    """
    Reads every steering recording in a .csv or .tdms file.

    :param sample_rate: overrides the rate stored in / inferred from the file
    :param channels: restrict to these column / channel names
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Recording file not found: '{path}'")

    ext = os.path.splitext(path)[1].lower()
    if ext == ".csv":
        recordings = load_csv(path, sample_rate, channels)
    elif ext == ".tdms":
        recordings = load_tdms(path, sample_rate, channels)
    else:
        raise InvalidArgumentError(f"Unsupported recording format '{ext}' ({path})")

    logger.info(f"Loaded {len(recordings)} recordings from {path}")
    return recordings
