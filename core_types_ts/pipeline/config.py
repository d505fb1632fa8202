"""
Configuration for the TypeScript emitter and parser.

Options can be built directly, or from a dictionary using either the
snake_case attribute names or the camelCase names used in
JSON config files (``noDescriptiveHeader``, ``useUnknown``...).
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any


def _snake_case(key: str) -> str:
    return "".join(f"_{c.lower()}" if c.isupper() else c for c in key)


class NonExportedMode(str, Enum):
    """How the parser treats type declarations without ``export``."""

    INCLUDE = "include"  # Default: parse them like exported ones
    FAIL = "fail"  # Raise UnsupportedSyntaxError


@dataclass
class EmitOptions:
    """Configuration options for TypeScript emission."""

    # Emit `export type Name = ...;` per named type; otherwise a single anonymous type
    declaration: bool = True

    # Spell the top type as `unknown` instead of `any`
    use_unknown: bool = False

    # Suppress the generated-file banner
    no_descriptive_header: bool = False

    # Attribution in the banner
    user_package: str | None = None
    user_package_url: str | None = None

    @staticmethod
    def from_dict(d: dict) -> EmitOptions:
        """Create options from a dictionary."""
        options = EmitOptions()
        for k, v in d.items():
            k = _snake_case(k)
            if hasattr(options, k):
                setattr(options, k, v)
        return options

    def to_dict(self) -> dict:
        """Convert options to a dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass
class ParseOptions:
    """Configuration options for TypeScript parsing."""

    non_exported: NonExportedMode = NonExportedMode.INCLUDE

    @staticmethod
    def from_dict(d: dict) -> ParseOptions:
        """Create options from a dictionary."""
        options = ParseOptions()
        for k, v in d.items():
            k = _snake_case(k)
            if k == "non_exported":
                v = NonExportedMode(v)
            if hasattr(options, k):
                setattr(options, k, v)
        return options

    def to_dict(self) -> dict:
        """Convert options to a dictionary."""
        return {"non_exported": self.non_exported.value}


def coerce_options(options: Any, options_class: type) -> Any:
    """Accept an options instance, a dictionary or None."""
    if options is None:
        return options_class()
    if isinstance(options, dict):
        return options_class.from_dict(options)
    return options
