"""ContextVar-based configuration for turbomd.

Provides thread-local configuration using Python's ContextVars (PEP 567).
The config is read by the include pass, the HTML renderer and the CLI; the
lexer and the assembler take no configuration.

Usage:
    from turbomd.config import TurboConfig, config_context

    with config_context(TurboConfig(include_suffix=".txt")):
        doc = turbomd.parse_file("book")

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent
    storage, so no locks are needed.

"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, fields
from typing import Any


@dataclass(frozen=True, slots=True)
class TurboConfig:
    """Immutable configuration.

    Attributes:
        include_suffix: Appended to include paths (and to ``parse_file``
            paths) that do not already end with it
        max_include_depth: Maximum nesting of includes before giving up
        resolve_includes: Whether ``parse_file`` runs the include pass
        html_title: When set, render a full HTML page with this title
        html_head: Extra markup placed in ``<head>`` of a full page

    """

    include_suffix: str = ".tmd"
    max_include_depth: int = 16
    resolve_includes: bool = True
    html_title: str | None = None
    html_head: str = ""

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> TurboConfig:
        """Create a config from a mapping, ignoring unknown keys.

        Example:
            >>> config = TurboConfig.from_dict({"html_title": "Notes", "colour": "red"})
            >>> config.html_title
            'Notes'

        """
        valid_fields = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)

    def with_suffix(self, path: str) -> str:
        """Return ``path`` with the include suffix appended when missing."""
        if not self.include_suffix or path.endswith(self.include_suffix):
            return path
        return f"{path}{self.include_suffix}"


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: TurboConfig = TurboConfig()

_config: ContextVar[TurboConfig] = ContextVar("turbomd_config", default=_DEFAULT_CONFIG)


def get_config() -> TurboConfig:
    """Get the active configuration for this thread/context."""
    return _config.get()


def set_config(config: TurboConfig) -> None:
    """Set configuration for the current context only."""
    _config.set(config)


def reset_config() -> None:
    """Reset to the default configuration."""
    _config.set(_DEFAULT_CONFIG)


@contextmanager
def config_context(config: TurboConfig) -> Iterator[TurboConfig]:
    """Temporarily use ``config``; the previous config is restored on exit.

    Example:
        >>> with config_context(TurboConfig(max_include_depth=2)):
        ...     get_config().max_include_depth
        2

    """
    token = _config.set(config)
    try:
        yield config
    finally:
        _config.reset(token)


__all__ = [
    "TurboConfig",
    "config_context",
    "get_config",
    "reset_config",
    "set_config",
]
