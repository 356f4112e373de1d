"""Lifetimes: lazy classes are built on first request, eager ones at build time."""

from __future__ import annotations

from picowire import Lifetime, Registry

built: list[str] = []


class Cache:
    def __init__(self) -> None:
        built.append("cache")


class Metrics:
    def __init__(self) -> None:
        built.append("metrics")


def main() -> None:
    registry = Registry().register(Cache).register(Metrics, lifetime=Lifetime.EAGER)

    injector = registry.build()
    print(f"after_build={','.join(built)}")  # => after_build=metrics

    first = injector.resolve(Cache)
    second = injector.resolve(Cache)
    print(f"after_resolve={','.join(built)}")  # => after_resolve=metrics,cache
    print(f"singleton={first is second}")  # => singleton=True


if __name__ == "__main__":
    main()
