"""
Shared fixtures for config module tests.
"""
import copy

import pytest

from lbcatalog.config.loader import DEFAULT_CONFIG


@pytest.fixture
def valid_config(tmp_path):
    """Complete valid configuration pointing at an existing directory."""
    config = copy.deepcopy(DEFAULT_CONFIG)
    config['launchbox']['installdir'] = str(tmp_path)
    return config
