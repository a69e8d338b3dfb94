"""CLI runtime context — one platform instance per CLI invocation."""

from __future__ import annotations

from nodeplat.platform import UnixPlatform, get_platform


class PlatformContext:
    """Singleton holder for the platform the CLI commands act on."""

    _instance: PlatformContext | None = None

    def __init__(self, platform: UnixPlatform | None = None) -> None:
        self.platform = platform or get_platform()

    @classmethod
    def get(cls) -> PlatformContext:
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        cls._instance = None
