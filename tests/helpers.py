"""
Fake transport handles and log inspection shared by the test modules.
"""

import logging
from unittest.mock import Mock

import requests
from requests.structures import CaseInsensitiveDict

_LEVELS = {
    'debug': logging.DEBUG,
    'info': logging.INFO,
    'warning': logging.WARNING,
    'error': logging.ERROR,
}


def make_response(status_code: int = 200, text: str = "") -> Mock:
    response = Mock(spec=requests.Response)
    response.status_code = status_code
    response.text = text
    return response


def make_session(response: Mock = None) -> Mock:
    session = Mock(spec=requests.Session)
    session.headers = CaseInsensitiveDict()
    session.request.return_value = response if response is not None else make_response()
    return session


def log_lines(logger: Mock) -> list:
    """Flatten the calls made on a mock logger into (level, message) pairs."""
    lines = []
    for name, args, _ in logger.method_calls:
        if name == 'log':
            lines.append((args[0], args[1]))
        elif name in _LEVELS:
            lines.append((_LEVELS[name], args[0]))
    return lines
