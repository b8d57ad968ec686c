"""
Base class for line sources.
A source yields raw text lines in input order and is exhausted exactly once.
"""
import abc
from typing import Iterator


class BaseLineSource(abc.ABC):
    """open() then lines(); close() when done. Usable as a context manager."""

    @abc.abstractmethod
    def open(self) -> None:
        pass

    @abc.abstractmethod
    def lines(self) -> Iterator[str]:
        """Yield lines without their trailing newline."""
        pass

    @abc.abstractmethod
    def close(self) -> None:
        pass

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, *args):
        self.close()
        return False
