from numstat.ingest.sources.base import BaseLineSource
from numstat.ingest.sources.files import FileLineSource

__all__ = ["BaseLineSource", "FileLineSource"]
