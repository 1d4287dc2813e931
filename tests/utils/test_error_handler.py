"""
Unit tests for the error handler.
"""
import logging

import pytest

from subsift.utils.error_handler import ErrorHandler


class TestErrorHandler:
    """Test ErrorHandler."""

    @pytest.mark.parametrize("verbose, quiet, level", [
        (False, False, logging.INFO),
        (True, False, logging.DEBUG),
        (False, True, logging.WARNING),
    ])
    def test_logging_level(self, verbose, quiet, level):
        handler = ErrorHandler(verbose=verbose, quiet=quiet)
        assert handler.logger.name == 'subsift'
        assert handler.logger.level == level

    @pytest.mark.parametrize("error_type, label", [
        ('input', "Input Error"),
        ('system', "System Error"),
        ('unexpected', "Unexpected Error"),
    ])
    def test_handle_error_exits(self, error_type, label, capsys):
        handler = ErrorHandler()
        with pytest.raises(SystemExit) as excinfo:
            handler.handle_error(error_type, "No domain entered")

        assert excinfo.value.code == ErrorHandler.EXIT_CODE
        assert f"{label}: No domain entered" in capsys.readouterr().err
