# ==============================================
# Configuration Management
# ==============================================
#
# PURPOSE:
#   Load all configuration from environment variables / .env file.
#   Provides typed config objects to the predictor, the lookup and
#   the CLI.
#
# CLASSES:
# --------
# - DatasetConfig (dataclass)
#     reference_source: str         (default "data/data1.csv")
#     mass_activity_source: str     (default "data/mass_activity_summary_converted.csv")
#     half_wave_source: str         (default "data/E1_2_summary.csv")
#     request_timeout_seconds: float (default 10.0)
#
# - PredictorConfig (dataclass)
#     default_k: int                (default 3)
#
# - AppConfig (dataclass)
#     dataset: DatasetConfig
#     predictor: PredictorConfig
#     log_level: str                (default "INFO")
#
# FUNCTION:
# ---------
# - get_config() -> AppConfig
#     Load .env using python-dotenv, construct AppConfig.
#     Returns the same singleton on repeated calls.
#
# USAGE:
# ------
#   from catalyst_knn.config import get_config
#   config = get_config()
#   print(config.dataset.reference_source)
#   print(config.predictor.default_k)
#
# ==============================================

import os
from dataclasses import dataclass, field
from typing import Optional
from pathlib import Path

from dotenv import load_dotenv


@dataclass
class DatasetConfig:
    """Where the reference tables come from (file paths or http(s) URLs)."""
    reference_source: str = "data/data1.csv"
    mass_activity_source: str = "data/mass_activity_summary_converted.csv"
    half_wave_source: str = "data/E1_2_summary.csv"
    request_timeout_seconds: float = 10.0


@dataclass
class PredictorConfig:
    """KNN predictor configuration."""
    default_k: int = 3


@dataclass
class AppConfig:
    """Main application configuration."""
    dataset: DatasetConfig = field(default_factory=DatasetConfig)
    predictor: PredictorConfig = field(default_factory=PredictorConfig)
    log_level: str = "INFO"


# Singleton instance
_config_instance: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Load configuration from environment variables / .env file.
    Returns the same singleton instance on repeated calls.

    Returns:
        AppConfig: Application configuration
    """
    global _config_instance

    if _config_instance is not None:
        return _config_instance

    # Load .env file from project root
    env_path = Path(__file__).parent.parent / ".env"
    load_dotenv(dotenv_path=env_path)

    dataset_config = DatasetConfig(
        reference_source=os.getenv("REFERENCE_DATA", "data/data1.csv"),
        mass_activity_source=os.getenv(
            "MASS_ACTIVITY_DATA", "data/mass_activity_summary_converted.csv"
        ),
        half_wave_source=os.getenv("HALF_WAVE_DATA", "data/E1_2_summary.csv"),
        request_timeout_seconds=float(os.getenv("REQUEST_TIMEOUT_SECONDS", "10.0"))
    )

    predictor_config = PredictorConfig(
        default_k=int(os.getenv("DEFAULT_K", "3"))
    )

    _config_instance = AppConfig(
        dataset=dataset_config,
        predictor=predictor_config,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper()
    )

    return _config_instance
