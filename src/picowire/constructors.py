from __future__ import annotations

import inspect
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, get_type_hints

from picowire.exceptions import (
    PicowireDependencyInferenceError,
    PicowireMultipleConstructorsError,
)
from picowire.markers import is_constructor, is_primary_constructor

INIT_NAME = "__init__"

_VARIADIC_KINDS = frozenset({inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD})


@dataclass(frozen=True, slots=True)
class ParameterInfo:
    """Information about a constructor parameter."""

    name: str
    identity: Any
    has_default: bool
    positional_only: bool


@dataclass(frozen=True, slots=True)
class ConstructorSpec:
    """How to build one class: the callable to invoke and what to pass it."""

    owner: type[Any]
    name: str
    build: Callable[..., Any]
    parameters: tuple[ParameterInfo, ...]

    def invoke(self, values: dict[str, Any]) -> Any:
        """Call the constructor with resolved values keyed by parameter name."""
        args = [values[p.name] for p in self.parameters if p.positional_only]
        kwargs = {
            p.name: values[p.name]
            for p in self.parameters
            if not p.positional_only and p.name in values
        }
        return self.build(*args, **kwargs)


class ConstructorInspector:
    """Select constructors and extract their type-hinted dependencies, once per class."""

    def __init__(self) -> None:
        self._specs_cache: dict[type[Any], ConstructorSpec] = {}

    def get_spec(self, concrete_type: type[Any]) -> ConstructorSpec:
        """Return the construction strategy for ``concrete_type``.

        Raises:
            PicowireMultipleConstructorsError: If several constructors are
                declared and not exactly one is marked primary.
            PicowireDependencyInferenceError: If a required parameter has no
                usable annotation.

        """
        cached = self._specs_cache.get(concrete_type)
        if cached is not None:
            return cached

        name, member = self._select_constructor(concrete_type)
        if name == INIT_NAME:
            spec = ConstructorSpec(
                owner=concrete_type,
                name=name,
                build=concrete_type,
                parameters=self._extract_parameters(concrete_type, member, skip_first=True),
            )
        else:
            bound = getattr(concrete_type, name)
            spec = ConstructorSpec(
                owner=concrete_type,
                name=name,
                build=bound,
                parameters=self._extract_parameters(concrete_type, bound, skip_first=False),
            )

        self._specs_cache[concrete_type] = spec
        return spec

    def _select_constructor(self, concrete_type: type[Any]) -> tuple[str, Any]:
        candidates: list[tuple[str, Any]] = [(INIT_NAME, concrete_type.__init__)]
        for name, member in vars(concrete_type).items():
            if isinstance(member, classmethod | staticmethod) and is_constructor(member):
                candidates.append((name, member))

        if len(candidates) == 1:
            return candidates[0]

        primary = [candidate for candidate in candidates if is_primary_constructor(candidate[1])]
        if len(primary) != 1:
            raise PicowireMultipleConstructorsError(
                concrete_type,
                [name for name, _ in candidates],
            )
        return primary[0]

    def _extract_parameters(
        self,
        concrete_type: type[Any],
        func: Any,
        *,
        skip_first: bool,
    ) -> tuple[ParameterInfo, ...]:
        # object.__init__ and other C-level initializers take no injectable arguments.
        if not inspect.isfunction(func) and not inspect.ismethod(func):
            return ()

        try:
            type_hints = get_type_hints(getattr(func, "__func__", func))
        except (NameError, TypeError) as e:
            raise PicowireDependencyInferenceError(concrete_type, str(e)) from e

        parameters = list(inspect.signature(func).parameters.values())
        if skip_first:
            parameters = parameters[1:]

        result: list[ParameterInfo] = []
        for param in parameters:
            if param.kind in _VARIADIC_KINDS:
                continue
            has_default = param.default is not inspect.Parameter.empty
            hint = type_hints.get(param.name)
            if hint is None:
                if has_default:
                    continue
                raise PicowireDependencyInferenceError(
                    concrete_type,
                    "parameter has no type annotation",
                    parameter=param.name,
                )
            result.append(
                ParameterInfo(
                    name=param.name,
                    identity=hint,
                    has_default=has_default,
                    positional_only=param.kind is inspect.Parameter.POSITIONAL_ONLY,
                ),
            )
        return tuple(result)
