"""Registration methods: classes, supertypes, instances and factories."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from picowire import Registry, Resolver


class Clock(ABC):
    @abstractmethod
    def now(self) -> str: ...


class FixedClock(Clock):
    def now(self) -> str:
        return "12:00"


@dataclass(frozen=True)
class Settings:
    dsn: str


class Connection:
    def __init__(self, dsn: str) -> None:
        self.dsn = dsn


class Report:
    def __init__(self, clock: Clock, connection: Connection) -> None:
        self.clock = clock
        self.connection = connection


def build_connection(resolver: Resolver) -> Connection:
    settings = resolver.resolve(Settings)
    return Connection(settings.dsn)


def main() -> None:
    injector = (
        Registry()
        .register_lazy(FixedClock)
        .register_instance(Settings(dsn="sqlite://"))
        .register_factory(Connection, build_connection)
        .register_lazy(Report)
        .build()
    )

    report = injector.resolve(Report)
    print(f"clock={report.clock.now()}")  # => clock=12:00
    print(f"dsn={report.connection.dsn}")  # => dsn=sqlite://
    print(f"same_clock={injector.resolve(Clock) is injector.resolve(FixedClock)}")  # => same_clock=True


if __name__ == "__main__":
    main()
