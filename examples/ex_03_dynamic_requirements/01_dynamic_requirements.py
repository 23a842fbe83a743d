"""Dynamic requirements: a maker may ask for more after receiving a dependency.

``Storage`` reads its backend name from ``Settings`` and only then asks for
that backend, so its full requirement set is unknown until ``Settings`` arrives.
"""

from __future__ import annotations

from makerbot import MakerBot


class Settings:
    backend = "DiskBackend"


class DiskBackend:
    root = "/var/data"


class MemoryBackend:
    root = ":memory:"


class Storage:
    def __init__(self) -> None:
        self.received: list[str] = []
        self.backend = None

    def inject_dependency(self, name=None, instance=None):
        if name is None:
            return ["Settings"]
        self.received.append(name)
        if name == "Settings":
            return [instance.backend]
        self.backend = instance
        return []


def main() -> None:
    bot = MakerBot(__name__)
    storage = bot.get_maker("Storage")

    print(f"received={storage.received}")  # => received=['Settings', 'DiskBackend']
    print(f"root={storage.backend.root}")  # => root=/var/data
    print(f"memory_built={bot.has_maker('MemoryBackend')}")  # => memory_built=False


if __name__ == "__main__":
    main()
