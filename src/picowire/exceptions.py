from __future__ import annotations

from collections.abc import Iterable
from typing import Any


def _name(identity: Any) -> str:
    qualname = getattr(identity, "__qualname__", None)
    if qualname is None:
        return repr(identity)
    return f"{identity.__module__}.{qualname}"


class PicowireError(Exception):
    """Represent a base class for all picowire-specific failures.

    Catch this type when you want to handle any picowire error path without
    matching each concrete exception class individually.
    """


class PicowireInvalidRegistrationError(PicowireError):
    """Signal invalid registration arguments.

    Raised by ``Registry.register_lazy``, ``Registry.register_eager`` and
    ``Registry.register_factory`` when the registered class is abstract or not
    a class at all, or when a factory is not callable.
    """


class PicowireAlreadyRegisteredError(PicowireInvalidRegistrationError):
    """Signal a duplicate registration in a strict registry.

    Raised only by registries created with ``allow_overrides=False``. The
    default registry lets the later registration win instead.
    """

    def __init__(self, identity: Any) -> None:
        self.identity = identity
        super().__init__(f"Injectable <{_name(identity)}> is already registered")


class PicowireInjectableNotFoundError(PicowireError):
    """Signal that a requested identity has no entry in any registration table.

    Typical fixes include registering the class (or one of its subclasses)
    lazily or eagerly, registering an instance of it, or registering a factory
    for the exact identity.

    ``requested_by`` names the class whose constructor needed the identity, or
    ``None`` when the identity was requested directly.
    """

    def __init__(self, identity: Any, requested_by: type[Any] | None = None) -> None:
        self.identity = identity
        self.requested_by = requested_by
        message = f"Injectable not found <{_name(identity)}>"
        if requested_by is not None:
            message += f", required by <{_name(requested_by)}>"
        super().__init__(message)


class PicowireCyclicalDependencyError(PicowireError):
    """Signal that a class is required again before its own construction completes.

    ``trail`` holds the identities that were in flight when the cycle was
    detected.
    """

    def __init__(self, concrete_type: Any, trail: Iterable[Any] = ()) -> None:
        self.concrete_type = concrete_type
        self.trail = frozenset(trail)
        super().__init__(
            f"Exception creating <{_name(concrete_type)}>, cyclical dependency detected",
        )


class PicowireMultipleConstructorsError(PicowireError):
    """Signal an ambiguous constructor choice.

    Raised when a class declares more than one constructor and not exactly one
    of them is marked with ``@primary_constructor``.
    """

    def __init__(self, concrete_type: type[Any], constructors: Iterable[str]) -> None:
        self.concrete_type = concrete_type
        self.constructors = tuple(constructors)
        super().__init__(
            f"Unable to instantiate <{_name(concrete_type)}>, class has multiple "
            f"constructors: {', '.join(self.constructors)}",
        )


class PicowireDependencyInferenceError(PicowireError):
    """Signal that a constructor parameter cannot be mapped to an identity.

    Common triggers are missing or unresolvable type annotations on required
    constructor parameters.
    """

    def __init__(
        self,
        concrete_type: type[Any],
        reason: str,
        parameter: str | None = None,
    ) -> None:
        self.concrete_type = concrete_type
        self.parameter = parameter
        target = f"parameter '{parameter}' of " if parameter is not None else ""
        super().__init__(
            f"Unable to infer dependencies for {target}<{_name(concrete_type)}>: {reason}",
        )


class PicowireUnexpectedConstructionError(PicowireError):
    """Signal that a constructor or factory raised while building an instance.

    The original exception is available as ``cause`` and as ``__cause__``.
    """

    def __init__(self, concrete_type: Any, cause: BaseException) -> None:
        self.concrete_type = concrete_type
        self.cause = cause
        super().__init__(
            f"Unexpected exception when instantiating <{_name(concrete_type)}>: {cause!r}",
        )
