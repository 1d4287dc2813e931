"""Error handling utilities for SUBSIFT."""

import logging
import sys
from typing import Optional


class ErrorHandler:
    """Centralized error reporting for the command-line boundary.

    Every category (``input``, ``system``, ``unexpected``) ends the process.
    Failures of individual sources never reach this handler.
    """

    EXIT_CODE = 2

    def __init__(self, verbose: bool = False, quiet: bool = False):
        """Initialize the error handler.

        Args:
            verbose: Enable debug logging and exception details
            quiet: Only log warnings and errors
        """
        self.verbose = verbose
        self.quiet = quiet
        self._setup_logging()

    def _setup_logging(self):
        """Set up logging configuration."""
        if self.verbose:
            level = logging.DEBUG
        elif self.quiet:
            level = logging.WARNING
        else:
            level = logging.INFO
        logging.basicConfig(
            level=level,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            handlers=[
                logging.StreamHandler(sys.stderr)
            ]
        )
        self.logger = logging.getLogger('subsift')
        self.logger.setLevel(level)

    def handle_error(self, error_type: str, message: str, exception: Optional[Exception] = None) -> None:
        """Handle errors based on type.

        Args:
            error_type: Type of error (input, system, unexpected)
            message: Error message to display
            exception: Optional exception object
        """
        if error_type == 'input':
            self._report("Input Error", message, exception)
            sys.exit(self.EXIT_CODE)
        elif error_type == 'system':
            self._report("System Error", message, exception)
            sys.exit(self.EXIT_CODE)
        else:
            print(f"Unexpected Error: {message}", file=sys.stderr)
            if exception:
                self.logger.error(f"Exception: {exception}", exc_info=exception)
            sys.exit(self.EXIT_CODE)

    def _report(self, label: str, message: str, exception: Optional[Exception] = None):
        print(f"{label}: {message}", file=sys.stderr)
        if self.verbose and exception:
            self.logger.debug(f"Exception details: {exception}")

