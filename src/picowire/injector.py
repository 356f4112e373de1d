from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from contextlib import AbstractContextManager, nullcontext
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any, TypeVar, overload

from picowire.constructors import ConstructorInspector
from picowire.exceptions import (
    PicowireCyclicalDependencyError,
    PicowireError,
    PicowireInjectableNotFoundError,
    PicowireUnexpectedConstructionError,
)
from picowire.lock_mode import LockMode
from picowire.types import Factory

T = TypeVar("T")

logger = logging.getLogger(__name__)

# Injector and trail of the resolution that is currently running a factory.
# Factories call back into ``resolve`` without a trail argument, this lets them
# continue it. The trail only applies to the injector that set it.
_factory_trail: ContextVar[tuple[Any, frozenset[Any]]] = ContextVar(
    "factory_trail",
    default=(None, frozenset()),
)

_MISSING = object()


@dataclass(frozen=True, slots=True)
class RegistrationTables:
    """Finalized registration tables handed from a registry to an injector."""

    lazy: Mapping[Any, type[Any]]
    eager: Mapping[Any, type[Any]]
    instances: Mapping[Any, Any]
    factories: Mapping[Any, Factory]


class Injector:
    """Resolve identities to singleton instances.

    The injector owns a cache seeded from the registered instances. Classes
    registered lazily are built on first request, eager classes are built while
    the injector is constructed, and factories run once on first request. Every
    product is cached, so each identity yields the same object for the lifetime
    of the injector.

    Creatable products are cached under their concrete class, so requesting a
    class through any of its registered supertypes returns one shared instance.
    Factory products are cached under the factory identity only.
    """

    __slots__ = (
        "_constructor_inspector",
        "_eager",
        "_factories",
        "_instances",
        "_lazy",
        "_lock",
    )

    def __init__(
        self,
        tables: RegistrationTables,
        *,
        lock_mode: LockMode = LockMode.THREAD,
    ) -> None:
        """Take ownership of ``tables`` and build every eager class.

        Args:
            tables: Finalized registration tables, usually from ``Registry.build``.
            lock_mode: Locking discipline for first-time resolution.

        Raises:
            PicowireError: If an eager class cannot be built.

        """
        self._lazy = tables.lazy
        self._eager = tables.eager
        self._factories = tables.factories
        self._instances: dict[Any, Any] = dict(tables.instances)
        self._constructor_inspector = ConstructorInspector()
        self._lock: AbstractContextManager[Any] = (
            threading.RLock() if lock_mode is LockMode.THREAD else nullcontext()
        )

        eager_types = list(dict.fromkeys(self._eager.values()))
        with self._lock:
            for concrete_type in eager_types:
                self._instantiate(concrete_type, frozenset())
        if eager_types:
            logger.info(
                "Injector started: eager_count=%d lazy_identity_count=%d "
                "instance_identity_count=%d factory_count=%d",
                len(eager_types),
                len(self._lazy),
                len(tables.instances),
                len(self._factories),
            )

    @overload
    def resolve(self, identity: type[T], /) -> T: ...

    @overload
    def resolve(self, identity: Any, /) -> Any: ...

    def resolve(self, identity: Any, /) -> Any:
        """Return the singleton instance registered for ``identity``.

        Args:
            identity: Class (or factory key) to resolve.

        Raises:
            PicowireInjectableNotFoundError: If nothing is registered for
                ``identity`` or for one of its transitive dependencies.
            PicowireCyclicalDependencyError: If a class requires itself, directly
                or transitively.
            PicowireMultipleConstructorsError: If a class to build has an
                ambiguous constructor choice.
            PicowireUnexpectedConstructionError: If a constructor or factory raises.

        """
        with self._lock:
            owner, trail = _factory_trail.get()
            if owner is not self:
                trail = frozenset()
            return self._resolve(identity, trail)

    def is_resolvable(self, identity: Any) -> bool:
        """Return whether any table holds an entry for ``identity``."""
        return (
            identity in self._instances
            or identity in self._lazy
            or identity in self._eager
            or identity in self._factories
        )

    def __contains__(self, identity: Any) -> bool:
        return self.is_resolvable(identity)

    def _resolve(
        self,
        identity: Any,
        trail: frozenset[Any],
        requested_by: type[Any] | None = None,
    ) -> Any:
        existing = self._instances.get(identity, _MISSING)
        if existing is not _MISSING:
            return existing

        concrete_type = self._lazy.get(identity)
        if concrete_type is None:
            concrete_type = self._eager.get(identity)
        if concrete_type is not None:
            return self._instantiate(concrete_type, trail)

        factory = self._factories.get(identity)
        if factory is not None:
            return self._invoke_factory(identity, factory, trail)

        raise PicowireInjectableNotFoundError(identity, requested_by=requested_by)

    def _invoke_factory(self, identity: Any, factory: Factory, trail: frozenset[Any]) -> Any:
        if identity in trail:
            raise PicowireCyclicalDependencyError(identity, trail)

        token = _factory_trail.set((self, trail | {identity}))
        try:
            instance = factory(self)
        except PicowireError:
            raise
        except Exception as e:
            raise PicowireUnexpectedConstructionError(identity, e) from e
        finally:
            _factory_trail.reset(token)

        self._instances[identity] = instance
        logger.debug("Factory for %r produced %r", identity, type(instance))
        return instance

    def _instantiate(self, concrete_type: type[Any], trail: frozenset[Any]) -> Any:
        existing = self._instances.get(concrete_type, _MISSING)
        if existing is not _MISSING:
            return existing

        if concrete_type in trail:
            raise PicowireCyclicalDependencyError(concrete_type, trail)

        spec = self._constructor_inspector.get_spec(concrete_type)
        requested = trail | {concrete_type}

        values: dict[str, Any] = {}
        for param in spec.parameters:
            if (
                param.has_default
                and not param.positional_only
                and not self.is_resolvable(param.identity)
            ):
                continue
            values[param.name] = self._resolve(
                param.identity,
                requested,
                requested_by=concrete_type,
            )

        try:
            instance = spec.invoke(values)
        except PicowireError:
            raise
        except Exception as e:
            raise PicowireUnexpectedConstructionError(concrete_type, e) from e

        self._instances[concrete_type] = instance
        logger.debug("Instantiated %r via %s", concrete_type, spec.name)
        return instance
