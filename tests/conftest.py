"""Test configuration and fixtures."""

import logfire
import pytest

from tests.harness import ANNIVERSARY

# Tests never ship spans anywhere
logfire.configure(send_to_logfire=False, console=False)


@pytest.fixture
def anniversary():
    return ANNIVERSARY
