"""Registration forms: bare name, instance alone, and name with instance.

Every name can be registered once; a second registration under the same name
raises ``DuplicateNameError`` and keeps the first one.
"""

from __future__ import annotations

from makerbot import DuplicateNameError, MakerBot


class Config:
    def __init__(self, env: str = "default") -> None:
        self.env = env


class Cache:
    pass


def main() -> None:
    bot = MakerBot(__name__)

    bot.add_maker("Cache")
    bot.add_maker(Config("production"))
    bot.add_maker("fallback_config", Config("fallback"))

    print(f"cache={type(bot.get_maker('Cache')).__name__}")  # => cache=Cache
    print(f"config={bot.get_maker('Config').env}")  # => config=production
    print(f"fallback={bot.get_maker('fallback_config').env}")  # => fallback=fallback

    try:
        bot.add_maker("Config")
    except DuplicateNameError as error:
        print(f"duplicate={error.name}")  # => duplicate=Config


if __name__ == "__main__":
    main()
