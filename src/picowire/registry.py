from __future__ import annotations

import inspect
import logging
from collections.abc import Iterable
from types import MappingProxyType
from typing import Any

from typing_extensions import Self

from picowire.exceptions import (
    PicowireAlreadyRegisteredError,
    PicowireInvalidRegistrationError,
)
from picowire.identities import expand_identities, is_runtime_class
from picowire.injector import Injector, RegistrationTables
from picowire.lock_mode import LockMode
from picowire.types import Factory, Lifetime

logger = logging.getLogger(__name__)


class Registry:
    """Collect registrations and build an ``Injector`` from them.

    Classes are registered lazily by default: they are instantiated only when
    needed, and only once. Lazy, eager and instance registrations fan out to
    every identity of the class (the class, its ancestors and its capability
    bases), so a dependency declared as an abstract base resolves to the one
    registered implementation. Factory registrations map a single identity.

    A later registration for an identity replaces the earlier one. Create the
    registry with ``allow_overrides=False`` to reject duplicates instead.

    Registration is not thread-safe; finish it before sharing the injector.
    """

    def __init__(self, *, allow_overrides: bool = True) -> None:
        self._allow_overrides = allow_overrides
        self._lazy: dict[Any, type[Any]] = {}
        self._eager: dict[Any, type[Any]] = {}
        self._instances: dict[Any, Any] = {}
        self._factories: dict[Any, Factory] = {}

    def register(self, concrete_type: type[Any], *, lifetime: Lifetime = Lifetime.LAZY) -> Self:
        """Register a class that can be instantiated and injected.

        The class must declare a single constructor, or mark the one to use
        with ``@primary_constructor``. Use ``register_factory`` for classes
        that cannot be edited.

        Args:
            concrete_type: Class to instantiate when it is needed.
            lifetime: ``Lifetime.LAZY`` to build on first request,
                ``Lifetime.EAGER`` to build when the injector is created.

        Returns:
            The registry, so calls can be chained.

        """
        if lifetime is Lifetime.EAGER:
            return self.register_eager(concrete_type)
        return self.register_lazy(concrete_type)

    def register_lazy(self, concrete_type: type[Any]) -> Self:
        """Register a class built on first request."""
        self._validate_concrete_type(concrete_type)
        self._put(self._lazy, expand_identities(concrete_type), concrete_type)
        return self

    def register_eager(self, concrete_type: type[Any]) -> Self:
        """Register a class built as soon as the injector is created."""
        self._validate_concrete_type(concrete_type)
        self._put(self._eager, expand_identities(concrete_type), concrete_type)
        return self

    def register_instance(self, instance: Any) -> Self:
        """Register a pre-built object under every identity of its class."""
        self._put(self._instances, expand_identities(type(instance)), instance)
        return self

    def register_factory(self, identity: Any, factory: Factory) -> Self:
        """Register a function that builds the instance for ``identity``.

        The factory receives the injector, so it may resolve further
        dependencies, and is called at most once.

        Args:
            identity: Exact identity the factory satisfies; no fan-out happens.
            factory: One-argument callable returning the instance.

        Returns:
            The registry, so calls can be chained.

        """
        if not callable(factory):
            msg = f"Factory for {identity!r} must be callable, got {factory!r}."
            raise PicowireInvalidRegistrationError(msg)
        self._put(self._factories, (identity,), factory)
        return self

    def build(self, *, lock_mode: LockMode = LockMode.THREAD) -> Injector:
        """Freeze a copy of the registrations and create an injector from it.

        Eager classes are instantiated before this returns. Registrations made
        afterwards do not affect the returned injector.
        """
        tables = RegistrationTables(
            lazy=MappingProxyType(dict(self._lazy)),
            eager=MappingProxyType(dict(self._eager)),
            instances=MappingProxyType(dict(self._instances)),
            factories=MappingProxyType(dict(self._factories)),
        )
        return Injector(tables, lock_mode=lock_mode)

    def _put(self, table: dict[Any, Any], identities: Iterable[Any], value: Any) -> None:
        keys = tuple(identities)
        tables = (self._lazy, self._eager, self._instances, self._factories)
        # Strict mode rejects the whole call before any table is touched.
        if not self._allow_overrides:
            for identity in keys:
                if any(identity in other for other in tables):
                    raise PicowireAlreadyRegisteredError(identity)

        for identity in keys:
            for other in tables:
                if identity in other:
                    logger.debug("Overriding registration for %r", identity)
                    del other[identity]
            table[identity] = value

    def _validate_concrete_type(self, concrete_type: object) -> None:
        if not is_runtime_class(concrete_type):
            msg = f"Registered class must be a class, got {concrete_type!r}."
            raise PicowireInvalidRegistrationError(msg)

        if inspect.isabstract(concrete_type):
            msg = f"Registered class '{concrete_type.__qualname__}' cannot be an abstract class."
            raise PicowireInvalidRegistrationError(msg)
