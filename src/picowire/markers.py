from __future__ import annotations

from typing import Any, TypeVar

F = TypeVar("F")

CONSTRUCTOR_ATTRIBUTE = "__picowire_constructor__"
PRIMARY_CONSTRUCTOR_ATTRIBUTE = "__picowire_primary_constructor__"


def _mark(target: Any, attribute: str) -> None:
    # Marks live on the plain function so either decorator order works.
    func = getattr(target, "__func__", target)
    setattr(func, attribute, True)


def constructor(method: F) -> F:
    """Declare a classmethod as an alternate constructor.

    Usage:
        class Connection:
            def __init__(self, settings: Settings) -> None: ...

            @constructor
            @classmethod
            def from_url(cls, url: Url) -> Connection: ...

    A class with more than one constructor (``__init__`` plus any alternate
    constructor) must mark exactly one of them with ``@primary_constructor``.
    """
    _mark(method, CONSTRUCTOR_ATTRIBUTE)
    return method


def primary_constructor(method: F) -> F:
    """Select the constructor the injector uses when a class declares several.

    Decorates either ``__init__`` or an alternate constructor classmethod. An
    alternate constructor marked primary does not need ``@constructor`` too.
    """
    _mark(method, CONSTRUCTOR_ATTRIBUTE)
    _mark(method, PRIMARY_CONSTRUCTOR_ATTRIBUTE)
    return method


def is_constructor(member: Any) -> bool:
    """Return whether ``member`` was marked with ``@constructor`` or ``@primary_constructor``."""
    func = getattr(member, "__func__", member)
    return getattr(func, CONSTRUCTOR_ATTRIBUTE, False) is True


def is_primary_constructor(member: Any) -> bool:
    """Return whether ``member`` was marked with ``@primary_constructor``."""
    func = getattr(member, "__func__", member)
    return getattr(func, PRIMARY_CONSTRUCTOR_ATTRIBUTE, False) is True
