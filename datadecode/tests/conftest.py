#    Copyright 2026 Two Sigma Open Source, LLC
#
#    Licensed under the Apache License, Version 2.0 (the "License");
#    you may not use this file except in compliance with the License.
#    You may obtain a copy of the License at
#
#        http://www.apache.org/licenses/LICENSE-2.0
#
#    Unless required by applicable law or agreed to in writing, software
#    distributed under the License is distributed on an "AS IS" BASIS,
#    WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#    See the License for the specific language governing permissions and
#    limitations under the License.

import logging
from collections.abc import Iterator

import pytest

from datadecode.config import LOGGER_NAME
from datadecode.models.type_model import parse_type_identifier
from datadecode.tests.state_builder import StateBuilder
from datadecode.utils.decode_logger import TRACE_LOGGER, get_logger


@pytest.fixture
def builder() -> StateBuilder:
    """Provide an empty state builder."""
    return StateBuilder()


@pytest.fixture
def types():
    """Parse a type identifier (shorthand for readability in tests)."""
    return parse_type_identifier


@pytest.fixture(autouse=True)
def restore_logging() -> Iterator[None]:
    """Undo configure_logging() calls made by CLI tests."""
    logger = logging.getLogger(LOGGER_NAME)
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    trace_level = get_logger(TRACE_LOGGER).level
    yield
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(level)
    logger.propagate = propagate
    get_logger(TRACE_LOGGER).setLevel(trace_level)
