"""
Pytest configuration file for SUBSIFT tests.
"""
import os
import sys
from unittest.mock import MagicMock

import pytest

# Add the parent directory to sys.path to allow importing subsift
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))


@pytest.fixture
def sample_domain():
    """Return a sample domain for testing."""
    return "example.com"


@pytest.fixture
def make_response():
    """Build fake requests responses carrying JSON or text bodies."""
    def _make(json_data=None, text=""):
        response = MagicMock()
        response.json.return_value = json_data
        response.text = text
        return response
    return _make


@pytest.fixture
def otx_page():
    """Build an OTX passive_dns page with ``count`` records."""
    def _page(count, prefix="host", domain="example.com"):
        return {
            "passive_dns": [
                {"hostname": f"{prefix}{i}.{domain}", "address": "192.0.2.1"}
                for i in range(count)
            ]
        }
    return _page
