"""
Read lines from files in order, or from stdin when no path (or "-") is given.
"""
import os
import sys
from typing import Iterator, TextIO

from numstat.ingest.sources.base import BaseLineSource


class FileLineSource(BaseLineSource):
    def __init__(self, paths: list[str] | None = None, stdin: TextIO | None = None):
        self.paths = list(paths or []) or ["-"]
        self.stdin = stdin
        self._fh = None

    def open(self) -> None:
        for path in self.paths:
            if path != "-" and not os.path.isfile(path):
                raise FileNotFoundError(f"input not found: {path}")

    def lines(self) -> Iterator[str]:
        for path in self.paths:
            if path == "-":
                yield from self._strip(self.stdin or sys.stdin)
                continue
            self._fh = open(path, "r", errors="replace")
            try:
                yield from self._strip(self._fh)
            finally:
                self._fh.close()
                self._fh = None

    @staticmethod
    def _strip(fh) -> Iterator[str]:
        for line in fh:
            yield line.rstrip("\r\n")

    def close(self) -> None:
        if self._fh:
            try:
                self._fh.close()
            except OSError:
                pass
            self._fh = None
