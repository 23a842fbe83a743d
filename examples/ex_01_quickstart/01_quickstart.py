"""Quickstart: ask for one maker and let makerbot build what it needs.

``Database`` asks for ``Config`` by name. Requesting ``Database`` constructs
both from this module, delivers ``Config`` to ``Database`` and returns the
fully wired instance.
"""

from __future__ import annotations

from makerbot import MakerBot


class Config:
    def __init__(self) -> None:
        self.dsn = "sqlite:///app.db"


class Database:
    def __init__(self) -> None:
        self.config: Config | None = None

    def inject_dependency(self, name=None, instance=None):
        if name is None:
            return ["Config"]
        self.config = instance
        return []


def main() -> None:
    bot = MakerBot(__name__)
    database = bot.get_maker("Database")

    print(f"dsn={database.config.dsn}")  # => dsn=sqlite:///app.db
    print(f"resolved={sorted(bot.get_resolved_maker_names())}")  # => resolved=['Config', 'Database', 'MakerBot']


if __name__ == "__main__":
    main()
