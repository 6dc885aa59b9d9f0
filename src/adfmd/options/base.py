#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adfmd/options/base.py
"""Base classes for parser and renderer options.

All option classes are frozen dataclasses. Field ``metadata`` carries a
``help`` string used by the CLI configuration loader when reporting unknown
or invalid keys.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from adfmd.exceptions import ValidationError


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> Self:
        """Build an instance from a configuration mapping.

        Keys use the field names; ``-`` is accepted in place of ``_``.

        Raises
        ------
        ValidationError
            If the mapping contains a key that is not a field of the class

        """
        known = {f.name for f in fields(cls)}  # type: ignore[arg-type]
        values: dict[str, Any] = {}
        for key, value in data.items():
            name = key.replace("-", "_")
            if name not in known:
                raise ValidationError(
                    f"Unknown option '{key}' for {cls.__name__}",
                    parameter_name=key,
                    parameter_value=value,
                )
            values[name] = value
        return cls(**values)


@dataclass(frozen=True)
class BaseRendererOptions(CloneFrozenMixin):
    """Base class for renderer options (Markdown and read-view)."""


@dataclass(frozen=True)
class BaseParserOptions(CloneFrozenMixin):
    """Base class for parser options."""
