"""Constructors: pick one with ``@primary_constructor`` when a class has several."""

from __future__ import annotations

from picowire import Registry, constructor, primary_constructor


class Url:
    def __init__(self) -> None:
        self.value = "https://example.org"


class Client:
    def __init__(self, base_url: str) -> None:
        self.base_url = base_url

    @primary_constructor
    @classmethod
    def from_url(cls, url: Url) -> Client:
        return cls(url.value)

    @constructor
    @classmethod
    def local(cls) -> Client:
        return cls("http://localhost")


def main() -> None:
    injector = Registry().register(Url).register(Client).build()

    client = injector.resolve(Client)
    print(f"base_url={client.base_url}")  # => base_url=https://example.org


if __name__ == "__main__":
    main()
