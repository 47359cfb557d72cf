"""Shared type definitions for mermaid-html.

Enums and small value types used by the configuration model, the script
emitter and the renderer.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

DEFAULT_CDN_VERSION = "10"


class Theme(Enum):
    DEFAULT = "default"
    DARK = "dark"
    FOREST = "forest"
    NEUTRAL = "neutral"
    BASE = "base"

    @classmethod
    def default(cls) -> Theme:
        return cls.DEFAULT


class SecurityLevel(Enum):
    STRICT = "strict"
    LOOSE = "loose"
    ANTISCRIPT = "antiscript"
    SANDBOX = "sandbox"

    @classmethod
    def default(cls) -> SecurityLevel:
        return cls.STRICT


class Curve(Enum):
    BASIS = "basis"
    LINEAR = "linear"
    CARDINAL = "cardinal"
    STEP_BEFORE = "stepBefore"
    STEP_AFTER = "stepAfter"

    @classmethod
    def default(cls) -> Curve:
        return cls.BASIS


# ─── Load strategies ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Embedded:
    """Inline the queueing loader shim into the page."""


@dataclass(frozen=True)
class Cdn:
    """Fetch a versioned build from the public CDN."""

    version: str = DEFAULT_CDN_VERSION


@dataclass(frozen=True)
class Custom:
    """Fetch the library from a caller-supplied URL."""

    url: str


LoadStrategy = Embedded | Cdn | Custom
