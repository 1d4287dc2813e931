"""Progress indicator utilities for SUBSIFT."""

import sys
from contextlib import contextmanager
from typing import Iterator, Optional
import threading

from tqdm import tqdm


class ProgressIndicator:
    """Thread-safe progress indicator for long-running operations."""

    def __init__(self, total: Optional[int] = None, desc: str = "",
                 disable: bool = False, unit: str = "it"):
        """Initialize progress indicator.

        Args:
            total: Total number of items (None for indeterminate)
            desc: Description of the operation
            disable: Whether to disable the progress indicator
            unit: Unit of items
        """
        self.total = total
        self.desc = desc
        self.disable = disable
        self.unit = unit
        self.current = 0
        self.tqdm_instance = None
        self._lock = threading.Lock()

    def start(self) -> None:
        if self.disable:
            return

        self.tqdm_instance = tqdm(
            total=self.total,
            desc=self.desc,
            unit=self.unit,
            file=sys.stderr
        )

    def update(self, n: int = 1) -> None:
        """Update progress by n units.

        Worker threads may call this concurrently.
        """
        with self._lock:
            self.current += n
            if self.tqdm_instance:
                self.tqdm_instance.update(n)

    def set_postfix(self, text: str) -> None:
        if self.tqdm_instance:
            self.tqdm_instance.set_postfix_str(text)

    def close(self) -> None:
        if self.tqdm_instance:
            self.tqdm_instance.close()
            self.tqdm_instance = None


@contextmanager
def progress_bar(total: Optional[int] = None, desc: str = "",
                 disable: bool = False, unit: str = "it") -> Iterator[ProgressIndicator]:
    """Context manager for progress indicator.

    Args:
        total: Total number of items (None for indeterminate)
        desc: Description of the operation
        disable: Whether to disable the progress indicator
        unit: Unit of items

    Yields:
        ProgressIndicator instance
    """
    progress = ProgressIndicator(total, desc, disable, unit)
    progress.start()
    try:
        yield progress
    finally:
        progress.close()
