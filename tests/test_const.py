"""
Tests for constants.
"""

from cosy import __version__
from cosy.const import APP_NAME, APP_VERSION, MAX_INCLUDE_DEPTH, RESERVED_KEYS


def test_constants():
    """Test that constants are defined."""
    assert APP_NAME == "COSY"
    assert APP_VERSION == __version__
    assert MAX_INCLUDE_DEPTH == 10
    assert RESERVED_KEYS == ("extends", "include")
