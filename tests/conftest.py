"""
Shared fixtures for http_caller tests: a fake transport handle and a mock logger.
"""

import logging
import sys
from pathlib import Path
from unittest.mock import Mock

import pytest

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from http_caller import CallerConfig, HttpCaller  # noqa: E402

from tests.helpers import make_session  # noqa: E402


@pytest.fixture
def logger():
    return Mock(spec=logging.Logger)


@pytest.fixture
def session():
    return make_session()


@pytest.fixture
def session_factory(session):
    return Mock(return_value=session)


@pytest.fixture
def caller(logger, session_factory):
    return HttpCaller(logger=logger, config=CallerConfig(), session_factory=session_factory)
