from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Any, Protocol, TypeAlias, TypeVar

T = TypeVar("T")


class Lifetime(str, Enum):
    """Defines when a registered class is instantiated."""

    LAZY = "lazy"
    """The class is instantiated on first request and cached afterwards."""

    EAGER = "eager"
    """The class is instantiated when the injector is built and cached afterwards."""


class Resolver(Protocol):
    """Anything that can hand out instances by identity."""

    def resolve(self, identity: Any, /) -> Any: ...  # noqa: D102


Factory: TypeAlias = Callable[[Resolver], Any]
"""A one-argument callable receiving the injector and returning the instance."""
