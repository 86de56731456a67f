"""File adapters around the numeric core."""

from .config import TrainingConfig, load_config, save_config
from .report import format_report, result_to_dict, write_report, write_result_json
from .weights import load_weights, save_weights

__all__ = [
    "TrainingConfig",
    "format_report",
    "load_config",
    "load_weights",
    "result_to_dict",
    "save_config",
    "save_weights",
    "write_report",
    "write_result_json",
]
