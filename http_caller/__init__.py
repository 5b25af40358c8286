"""
Thin synchronous HTTP client wrapper with sanitized request logging
"""

from .caller import HttpCaller
from .config import CallerConfig, load_config
from .logging_config import configure_logging
from .result import CallResult
from .sanitizer import remove_token_parameter

__all__ = [
    'HttpCaller',
    'CallerConfig',
    'CallResult',
    'configure_logging',
    'load_config',
    'remove_token_parameter',
]
