"""
Shared fixtures for the RegForm GUI test suite.
"""

import os

# Set offscreen platform to prevent display errors on headless systems
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from unittest.mock import Mock  # noqa: E402

import pytest  # noqa: E402

from core.config import DEFAULT_CONFIG  # noqa: E402
from core.config_manager import ConfigManager  # noqa: E402
from core.form_model import RegistrationForm  # noqa: E402


@pytest.fixture
def valid_form():
    """A form that passes every rule."""
    return RegistrationForm(
        first_name="Ada",
        last_name="Lovelace",
        email="ada.lovelace@example.com",
        phone_number="1234567890",
        password="Abcdefg1!",
        confirm_password="Abcdefg1!",
        age="36",
        gender="Female",
        interests=("coding", "reading"),
        birth_date="1815-12-10",
    )


@pytest.fixture
def empty_form():
    """The initial, empty form."""
    return RegistrationForm.empty()


@pytest.fixture
def mock_config():
    """ConfigManager double that serves defaults and records writes."""
    config = Mock(spec=ConfigManager)
    config.get.side_effect = lambda key, default=None: DEFAULT_CONFIG.get(key, default)
    config.get_engine_name.return_value = "schema"
    return config
