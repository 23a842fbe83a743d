"""Construction scopes: choose how bare names turn into instances.

A scope can be a module prefix, a mapping of factories, a ``factory(name)``
callable, or any object with a ``construct(name)`` method.
"""

from __future__ import annotations

from makerbot import MakerBot


class Greeter:
    def __init__(self, greeting: str = "hello") -> None:
        self.greeting = greeting


class UpperScope:
    def construct(self, name: str) -> object:
        return name.upper()


def main() -> None:
    by_module = MakerBot(__name__)
    print(f"module={by_module.get_maker('Greeter').greeting}")  # => module=hello
    print(f"prefix={by_module.construction_prefix}")  # => prefix=__main__

    by_mapping = MakerBot({"Greeter": lambda: Greeter("hi")})
    print(f"mapping={by_mapping.get_maker('Greeter').greeting}")  # => mapping=hi

    by_callable = MakerBot(lambda name: Greeter(f"hey {name}"))
    print(f"callable={by_callable.get_maker('Greeter').greeting}")  # => callable=hey Greeter

    by_object = MakerBot(UpperScope())
    print(f"object={by_object.get_maker('token')}")  # => object=TOKEN


if __name__ == "__main__":
    main()
