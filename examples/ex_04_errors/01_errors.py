"""Errors: circular requirements and names the construction scope cannot build."""

from __future__ import annotations

from makerbot import ConstructionError, MakerBot, UnresolvableGraphError


class Chicken:
    def inject_dependency(self, name=None, instance=None):
        return ["Egg"]


class Egg:
    def inject_dependency(self, name=None, instance=None):
        return ["Chicken"]


def main() -> None:
    bot = MakerBot(__name__)

    try:
        bot.get_maker("Chicken")
    except UnresolvableGraphError as error:
        print(f"cycle={' -> '.join(error.cycle)}")  # => cycle=Chicken -> Egg -> Chicken

    try:
        bot.add_maker("Dinosaur")
    except ConstructionError as error:
        print(f"missing={error.name}")  # => missing=Dinosaur

    print(f"pending={sorted(bot.get_pending_dependencies())}")  # => pending=['Chicken', 'Egg']


if __name__ == "__main__":
    main()
