"""
Transport settings for HttpCaller, loaded from config.yaml and .env
"""

import os
import yaml
from pathlib import Path
from typing import Dict, Any, Union
from dotenv import load_dotenv


class CallerConfig:
    """Construction-time transport settings shared by every call of an HttpCaller."""

    def __init__(
        self,
        connect_timeout: float = 10.0,
        verify_tls: bool = True,
        follow_redirects: bool = True,
        log_level: str = 'INFO'
    ):
        self.connect_timeout = float(connect_timeout)
        self.verify_tls = verify_tls
        self.follow_redirects = follow_redirects
        self.log_level = log_level

    @property
    def timeout(self):
        """requests timeout tuple: connect timeout only, reads may block indefinitely."""
        return (self.connect_timeout, None)

    def __repr__(self) -> str:
        return (
            f"CallerConfig(connect_timeout={self.connect_timeout}, verify_tls={self.verify_tls}, "
            f"follow_redirects={self.follow_redirects}, log_level={self.log_level!r})"
        )


# Environment variable -> (section, key)
ENV_MAPPINGS = {
    'CALLER_CONNECT_TIMEOUT': ('caller', 'connect_timeout'),
    'CALLER_VERIFY_TLS': ('caller', 'verify_tls'),
    'CALLER_FOLLOW_REDIRECTS': ('caller', 'follow_redirects'),
    'LOG_LEVEL': ('logging', 'level'),
}


def load_config(config_path: Union[str, Path] = None) -> CallerConfig:
    """Build a CallerConfig from a YAML file with environment variable overrides.

    Args:
        config_path: Path to the YAML file. If None, uses the config.yaml
                    shipped next to this module.

    Returns:
        CallerConfig with the resolved settings
    """
    if config_path is None:
        config_path = Path(__file__).parent / "config.yaml"

    load_dotenv()

    config = _apply_env_overrides(_read_yaml(Path(config_path)))
    caller = config.get('caller') or {}
    logging_section = config.get('logging') or {}

    return CallerConfig(
        connect_timeout=caller.get('connect_timeout', 10.0),
        verify_tls=caller.get('verify_tls', True),
        follow_redirects=caller.get('follow_redirects', True),
        log_level=str(logging_section.get('level', 'INFO')).upper(),
    )


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, 'r') as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError:
        raise FileNotFoundError(f"Configuration file not found: {path}")
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in configuration file: {e}")


def _apply_env_overrides(config: Dict[str, Any]) -> Dict[str, Any]:
    """Apply environment variable overrides to configuration."""
    for env_var, (section, key) in ENV_MAPPINGS.items():
        env_value = os.getenv(env_var)
        if env_value is not None:
            if not isinstance(config.get(section), dict):
                config[section] = {}
            config[section][key] = _convert_env_value(env_value)

    return config


def _convert_env_value(value: str):
    """Convert environment variable string to appropriate Python type."""
    if value.lower() in ('true', 'false'):
        return value.lower() == 'true'

    try:
        return int(value)
    except ValueError:
        pass

    try:
        return float(value)
    except ValueError:
        pass

    return value
