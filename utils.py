# utils.py
"""
Utility functions for the coin burst application.

This module provides the helpers shared by the entry point and the tests:
logging setup, reading config.json, and turning its "effects" section
into validated FieldConfig records.
"""
import logging
import logging.handlers
import json
import os
from typing import Dict, Any, List

from particle import FieldConfig

DEFAULT_LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
DEFAULT_LOG_FILE = 'logs/coin_burst.log'

# --- Data Contracts ---
#
# setup_logging(config: Dict[str, Any]) -> None:
#   - Inputs:
#     - config: A dictionary with an optional "logging" key holding
#       "level", "format", "log_file", "max_bytes" and "backup_count".
#   - Side Effects: Replaces the root logger's handlers with a console
#     handler and, unless log_file is null, a rotating file handler.
#     Creates the log directory if needed.
#
# load_config(path: str) -> Dict[str, Any]:
#   - Raises: FileNotFoundError, json.JSONDecodeError (logged, then re-raised).
#
# effect_configs(config: Dict[str, Any]) -> List[FieldConfig]:
#   - Outputs: one FieldConfig per entry of config["effects"]. A missing
#     or empty section yields the default gold coin effect.
#   - Raises: ConfigurationError for malformed entries.


def setup_logging(config: Dict[str, Any]) -> None:
    """
    Configures the root logger from the "logging" section of the config.

    Console output is always on; a rotating log file is added unless
    "log_file" is null or empty.
    """
    section = config.get('logging', {})
    level = str(section.get('level', 'INFO')).upper()
    formatter = logging.Formatter(section.get('format', DEFAULT_LOG_FORMAT))
    log_file = section.get('log_file', DEFAULT_LOG_FILE)

    root = logging.getLogger()
    root.setLevel(level)
    # Reconfiguring replaces earlier handlers instead of stacking them
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()

    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        os.makedirs(os.path.dirname(log_file) or '.', exist_ok=True)
        handlers.append(logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=section.get('max_bytes', 1024 * 1024),
            backupCount=section.get('backup_count', 5),
        ))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    # Numba traces every compilation pass at DEBUG.
    logging.getLogger('numba').setLevel(max(root.level, logging.INFO))

    logging.info("Logging system initialized.")
    logging.debug(f"Log level {level}, log file: {log_file or 'disabled'}.")


def load_config(path: str) -> Dict[str, Any]:
    """Reads the JSON configuration at `path`."""
    logging.info(f"Reading configuration from {path}...")
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except FileNotFoundError:
        logging.error(f"No configuration file at {path}.")
        raise
    except json.JSONDecodeError as e:
        logging.error(f"Invalid JSON in {path}: {e}")
        raise


def effect_configs(config: Dict[str, Any]) -> List[FieldConfig]:
    """Builds the FieldConfig of every effect listed in the configuration."""
    entries = config.get('effects') or []
    if not entries:
        logging.info("No effects configured. Using the default gold coin effect.")
        return [FieldConfig()]
    return [FieldConfig.from_params(params) for params in entries]
