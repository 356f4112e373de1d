from picowire.exceptions import (
    PicowireAlreadyRegisteredError,
    PicowireCyclicalDependencyError,
    PicowireDependencyInferenceError,
    PicowireError,
    PicowireInjectableNotFoundError,
    PicowireInvalidRegistrationError,
    PicowireMultipleConstructorsError,
    PicowireUnexpectedConstructionError,
)
from picowire.identities import expand_identities
from picowire.injector import Injector, RegistrationTables
from picowire.lock_mode import LockMode
from picowire.markers import constructor, primary_constructor
from picowire.registry import Registry
from picowire.types import Factory, Lifetime, Resolver

__all__ = [
    "Factory",
    "Injector",
    "Lifetime",
    "LockMode",
    "PicowireAlreadyRegisteredError",
    "PicowireCyclicalDependencyError",
    "PicowireDependencyInferenceError",
    "PicowireError",
    "PicowireInjectableNotFoundError",
    "PicowireInvalidRegistrationError",
    "PicowireMultipleConstructorsError",
    "PicowireUnexpectedConstructionError",
    "RegistrationTables",
    "Registry",
    "Resolver",
    "constructor",
    "expand_identities",
    "primary_constructor",
]
