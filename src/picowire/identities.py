from __future__ import annotations

import abc
import inspect
import types
import typing
from typing import Any, TypeGuard

from picowire.exceptions import PicowireInvalidRegistrationError

# Bases that show up in an MRO without describing a capability of the class.
_IGNORED_BASES: frozenset[Any] = frozenset({object, typing.Generic, typing.Protocol, abc.ABC})


def is_runtime_class(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a runtime class safe for class-only operations.

    Args:
        candidate: Value being checked.

    """
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


def expand_identities(concrete_type: type[Any]) -> frozenset[type[Any]]:
    """Return every identity that should resolve to ``concrete_type``.

    The result holds the class itself plus every ancestor and capability base
    (ABCs and protocols) found in its MRO, except ``object`` and the typing
    helper bases.

    Args:
        concrete_type: Class whose identities are computed.

    Raises:
        PicowireInvalidRegistrationError: If ``concrete_type`` is not a class.

    """
    if not is_runtime_class(concrete_type):
        msg = f"Expected a class, got {concrete_type!r}."
        raise PicowireInvalidRegistrationError(msg)

    return frozenset(
        base for base in inspect.getmro(concrete_type) if base not in _IGNORED_BASES
    ) | {concrete_type}
