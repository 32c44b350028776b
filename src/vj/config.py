"""Settings resolution: command line, then environment, then defaults."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from vj.render import DEFAULT_THEME, THEMES
from vj.viewport import DEFAULT_MARGIN


@dataclass(frozen=True)
class Settings:
    theme: str = DEFAULT_THEME
    margin: int = DEFAULT_MARGIN
    log_file: str = ""


def resolve_settings(
    *,
    theme: str | None = None,
    margin: int | None = None,
    log_file: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Merge explicit values with ``$VJ_THEME``, ``$VJ_MARGIN`` and ``$VJ_LOG``.

    Raises ValueError for an unknown theme or a bad margin.
    """
    env = os.environ if environ is None else environ

    if theme is None:
        theme = env.get("VJ_THEME") or DEFAULT_THEME
    if theme not in THEMES:
        raise ValueError(
            f"unknown theme {theme!r} (choose from {', '.join(sorted(THEMES))})"
        )

    if margin is None:
        raw = env.get("VJ_MARGIN", "")
        if raw:
            try:
                margin = int(raw)
            except ValueError:
                raise ValueError(f"VJ_MARGIN must be an integer, got {raw!r}") from None
        else:
            margin = DEFAULT_MARGIN
    if margin < 0:
        raise ValueError(f"margin must not be negative, got {margin}")

    if log_file is None:
        log_file = env.get("VJ_LOG", "")

    return Settings(theme=theme, margin=margin, log_file=log_file)
