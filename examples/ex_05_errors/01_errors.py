"""Errors: every failure is a ``PicowireError`` subclass with context attached."""

from __future__ import annotations

from picowire import (
    PicowireCyclicalDependencyError,
    PicowireInjectableNotFoundError,
    Registry,
)


class Missing:
    pass


class Chicken:
    def __init__(self, egg: Egg) -> None:
        self.egg = egg


class Egg:
    def __init__(self, chicken: Chicken) -> None:
        self.chicken = chicken


def main() -> None:
    injector = Registry().register(Chicken).register(Egg).build()

    try:
        injector.resolve(Missing)
    except PicowireInjectableNotFoundError as error:
        print(f"not_found={error.identity.__name__}")  # => not_found=Missing

    try:
        injector.resolve(Chicken)
    except PicowireCyclicalDependencyError as error:
        print(f"cycle={error.concrete_type.__name__}")  # => cycle=Chicken


if __name__ == "__main__":
    main()
