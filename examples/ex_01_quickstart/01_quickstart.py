"""Quickstart: register plain classes, resolve the top-level service.

The injector reads constructor type hints, builds the whole dependency chain
and keeps every instance as a singleton.
"""

from __future__ import annotations

from picowire import Registry


class Database:
    def __init__(self) -> None:
        self.host = "localhost"


class UserRepository:
    def __init__(self, database: Database) -> None:
        self.database = database


class UserService:
    def __init__(self, repository: UserRepository) -> None:
        self.repository = repository


def main() -> None:
    injector = (
        Registry()
        .register(Database)
        .register(UserRepository)
        .register(UserService)
        .build()
    )
    service = injector.resolve(UserService)

    print(f"db_host={service.repository.database.host}")  # => db_host=localhost

    chain = (
        f"{type(service).__name__}"
        f">{type(service.repository).__name__}"
        f">{type(service.repository.database).__name__}"
    )
    print(f"chain={chain}")  # => chain=UserService>UserRepository>Database
    print(f"shared_database={injector.resolve(Database) is service.repository.database}")  # => shared_database=True


if __name__ == "__main__":
    main()
