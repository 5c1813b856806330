# config.py
from typing import Dict
from pydantic_settings import BaseSettings, SettingsConfigDict

from swrr.metrics.reversal_rate import SWRRConfig


class Settings(BaseSettings):
    """
    Project-wide settings (Pydantic V2).
    Loaded from environment variables and the .env file, defaults otherwise.
    """

    # Storage Settings
    DATA_ROOT: str = "data"
    LOG_DIR: str = "./logs"
    LOG_LEVEL: str = "INFO"

    # Analysis Settings
    DEFAULT_FILTER_ORDER: int = 2

    # Large, slow corrections (visual distraction)
    VISUAL_GAP_SIZE_DEG: float = 3.0
    VISUAL_CUTOFF_HZ: float = 0.6

    # Small, fast corrections (cognitive distraction)
    COGNITIVE_GAP_SIZE_DEG: float = 0.1
    COGNITIVE_CUTOFF_HZ: float = 2.0

    # .env file settings
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


# singleton instance
settings = Settings()


def analysis_presets(cfg: Settings = settings) -> Dict[str, SWRRConfig]:
    """The two analyses recommended by Markkula & Engström (2006)"""
    return {
        "visual": SWRRConfig(
            gap_size_deg=cfg.VISUAL_GAP_SIZE_DEG,
            cutoff_hz=cfg.VISUAL_CUTOFF_HZ,
            filter_order=cfg.DEFAULT_FILTER_ORDER,
        ),
        "cognitive": SWRRConfig(
            gap_size_deg=cfg.COGNITIVE_GAP_SIZE_DEG,
            cutoff_hz=cfg.COGNITIVE_CUTOFF_HZ,
            filter_order=cfg.DEFAULT_FILTER_ORDER,
        ),
    }
