from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional


DEFAULT_LINE_LIMIT = 1_000_000

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _env_flag(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    return default


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None:
        return default
    try:
        return max(0, int(raw.strip()))
    except ValueError:
        return default


@dataclass(frozen=True)
class SearchConfig:
    """Options consumed by the search counter and its callers.

    - line_limit: buffers with more lines than this are never counted; the
      caller shows a placeholder instead of invoking the engine.
    - count_all_per_line: count every match on a line (True) or only the
      first one (False), like the substitute command's global flag.
    - wrapscan: navigation wraps around the end of the buffer.
    - show_pattern: append the pattern to the indicator message.
    """

    line_limit: int = DEFAULT_LINE_LIMIT
    count_all_per_line: bool = True
    wrapscan: bool = True
    show_pattern: bool = True

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "SearchConfig":
        env = os.environ if env is None else env
        return cls(
            line_limit=_env_int(env, "SEARCHINDEX_LINE_LIMIT", DEFAULT_LINE_LIMIT),
            count_all_per_line=_env_flag(env, "SEARCHINDEX_COUNT_ALL", True),
            wrapscan=_env_flag(env, "SEARCHINDEX_WRAPSCAN", True),
        )

    def with_overrides(self, **changes) -> "SearchConfig":
        """Return a copy with every non-None keyword applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    def exceeds_limit(self, line_count: int) -> bool:
        return line_count > self.line_limit
