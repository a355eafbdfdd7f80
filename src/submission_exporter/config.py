"""
Configuration for the submission exporter.
"""
import logging
import os
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

import yaml


logger = logging.getLogger(__name__)

PAGE_SIZES = ("A4", "letter")


@dataclass
class ExporterConfig:
    """Configuration for the dashboard API, output and report rendering."""

    # API configuration
    api_url: str = "http://localhost:3001"
    api_token: Optional[str] = None
    request_timeout: float = 10.0

    # Output configuration
    output_dir: str = "output"
    log_dir: Optional[str] = None

    # Consent report rendering
    report_title: str = "Client Consent Form"
    signature_path: str = "wp-content/uploads/gravity_forms/sig"
    page_size: str = "A4"

    # Sync summary
    sync_result_ttl: float = 5.0

    def __post_init__(self):
        """Validate configuration after initialization."""
        if not self.api_url:
            raise ValueError("api_url cannot be empty")

        if self.request_timeout <= 0:
            raise ValueError("request_timeout must be positive")

        if self.sync_result_ttl <= 0:
            raise ValueError("sync_result_ttl must be positive")

        if self.page_size not in PAGE_SIZES:
            raise ValueError(f"Invalid page_size: {self.page_size}. Must be one of: {list(PAGE_SIZES)}")

        self.api_url = self.api_url.rstrip("/")
        self.signature_path = self.signature_path.strip("/")

        # Fall back to the environment for the secret
        if not self.api_token:
            self.api_token = os.getenv("SUBMISSION_API_TOKEN")


ENV_OVERRIDES = {
    "SUBMISSION_API_URL": "api_url",
    "SUBMISSION_OUTPUT_DIR": "output_dir",
    "SUBMISSION_LOG_DIR": "log_dir",
}


def create_config_from_dict(config_dict: Dict[str, Any]) -> ExporterConfig:
    """
    Create a configuration from a dictionary, ignoring unknown keys.

    Args:
        config_dict: Dictionary with configuration values

    Returns:
        ExporterConfig instance
    """
    known = {f.name for f in fields(ExporterConfig)}
    unknown = set(config_dict) - known
    if unknown:
        logger.warning(f"Ignoring unknown configuration keys: {sorted(unknown)}")
    return ExporterConfig(**{k: v for k, v in config_dict.items() if k in known})


def load_config(yaml_path: Optional[str] = None, **overrides: Any) -> ExporterConfig:
    """
    Build the configuration from defaults, a YAML file, the environment and
    explicit overrides, in increasing order of precedence.

    Args:
        yaml_path: Optional path to a YAML configuration file
        **overrides: Values that win over every other source; None is ignored

    Returns:
        ExporterConfig instance

    Raises:
        FileNotFoundError: If yaml_path is given but does not exist
        ValueError: If the file is malformed or a value is invalid
    """
    values: Dict[str, Any] = {}

    if yaml_path:
        if not os.path.exists(yaml_path):
            raise FileNotFoundError(f"Configuration file not found: {yaml_path}")

        try:
            with open(yaml_path, 'r', encoding='utf-8') as file:
                file_data = yaml.safe_load(file) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Error parsing YAML file {yaml_path}: {e}")

        if not isinstance(file_data, dict):
            raise ValueError(f"Configuration file {yaml_path} must contain a mapping")

        values.update(file_data)
        logger.info(f"Loaded configuration from {yaml_path}")

    for env_var, key in ENV_OVERRIDES.items():
        env_value = os.getenv(env_var)
        if env_value:
            values[key] = env_value

    values.update({k: v for k, v in overrides.items() if v is not None})

    return create_config_from_dict(values)
