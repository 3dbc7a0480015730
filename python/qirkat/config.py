"""Runtime settings for the command-line game."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from .ai import MAX_DEPTH


PLAYER_KINDS = ("manual", "ai")


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class Settings:
    white: str = "manual"
    black: str = "ai"
    depth: int = MAX_DEPTH
    log_level: str = "WARNING"
    board: Optional[str] = None
    next_move: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        # Environment overrides on top of the defaults
        env = os.environ if environ is None else environ
        settings = cls()

        depth = env.get("QIRKAT_SEARCH_DEPTH", "").strip()
        if depth:
            try:
                settings = replace(settings, depth=int(depth))
            except ValueError as exc:
                raise ConfigError(f"QIRKAT_SEARCH_DEPTH must be an integer, got {depth!r}") from exc

        log_level = env.get("QIRKAT_LOG_LEVEL", "").strip()
        if log_level:
            settings = replace(settings, log_level=log_level)

        return settings.validated()

    def with_args(self, args: argparse.Namespace) -> "Settings":
        overrides = {
            name: getattr(args, name)
            for name in ("white", "black", "depth", "log_level", "board", "next_move")
            if getattr(args, name, None) is not None
        }
        return replace(self, **overrides).validated()

    def validated(self) -> "Settings":
        if self.depth < 1:
            raise ConfigError(f"search depth must be at least 1, got {self.depth}")
        for side in (self.white, self.black):
            if side not in PLAYER_KINDS:
                raise ConfigError(f"unknown player kind {side!r}")
        return self
