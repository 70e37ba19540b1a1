"""Configuration defaults, env vars, and the per-invocation context for jog."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from jog.errors import EnvironmentVariableError


VERSION = "0.4.0"

JOGFILE_NAME = "jogfile"
REST_MARKER = "..."

SHELL_VAR = "SHELL"
DEPTH_VAR = "JOG_DEPTH"
MAX_DEPTH_VAR = "JOG_MAX_DEPTH"
VERBOSE_VAR = "JOG_VERBOSE"

DEFAULT_MAX_DEPTH = 100

# Exit code for every core-level failure (discovery, parse, resolution, spawn...)
FALLBACK_EXIT_CODE = 1


def env_int(environ: Mapping[str, str], key: str, default: int) -> int:
    """Parse ``environ[key]`` as an integer, or return *default* when unset."""
    raw = environ.get(key)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        raise EnvironmentVariableError(
            f"invalid value for {key}: '{raw}' is not an integer"
        ) from None


def env_flag(environ: Mapping[str, str], key: str) -> bool:
    """True when ``environ[key]`` is set to a non-blank value."""
    return bool(environ.get(key, "").strip())


@dataclass(frozen=True)
class Config:
    """Invocation context for one run of jog.

    The recursion depth is carried here and handed to the child through its
    environment block; nothing about it lives in module state.
    """

    depth: int = 0
    max_depth: int = DEFAULT_MAX_DEPTH
    shell: str = ""
    verbose: bool = False
    environ: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Config:
        env = dict(os.environ if environ is None else environ)
        return cls(
            depth=env_int(env, DEPTH_VAR, 0),
            max_depth=env_int(env, MAX_DEPTH_VAR, DEFAULT_MAX_DEPTH),
            shell=env.get(SHELL_VAR, ""),
            verbose=env_flag(env, VERBOSE_VAR),
            environ=env,
        )
