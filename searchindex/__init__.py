from .config import SearchConfig
from .engine import MatchCounts, SearchIndex
from .host import InvalidPattern, SearchHost, TextBuffer, ViewGuard
from .search import SearchController
from .version import __version__

__all__ = [
    "InvalidPattern",
    "MatchCounts",
    "SearchConfig",
    "SearchController",
    "SearchHost",
    "SearchIndex",
    "TextBuffer",
    "ViewGuard",
    "__version__",
]
