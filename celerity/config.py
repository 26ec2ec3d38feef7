"""Server settings read from ``config/server.toml``."""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

DEFAULT_SERVER_PORT = 25565
DEFAULT_COMPRESSION_THRESHOLD = 256
DEFAULT_MAX_PLAYERS = 64
DEFAULT_MOTD = "A Minecraft Server"
DEFAULT_FAVICON = ""

CONFIG_PATH = Path("config") / "server.toml"


class ServerConfig:
    """Settings from the server's TOML file, with defaults for anything unusable.

    A missing key, a value of the wrong type or an out-of-range number all
    fall back to the default.
    """

    def __init__(self, server_root: str | os.PathLike[str]) -> None:
        with open(Path(server_root) / CONFIG_PATH, "rb") as stream:
            self._values: dict[str, Any] = tomllib.load(stream)

    def _ushort(self, key: str, default: int) -> int:
        value = self._values.get(key)
        if isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= 0xFFFF:
            return value
        return default

    def _string(self, key: str, default: str) -> str:
        value = self._values.get(key)
        return value if isinstance(value, str) else default

    @property
    def server_port(self) -> int:
        return self._ushort("port", DEFAULT_SERVER_PORT)

    @property
    def compression_threshold(self) -> int:
        return self._ushort("compression_threshold", DEFAULT_COMPRESSION_THRESHOLD)

    @property
    def max_players(self) -> int:
        return self._ushort("max_players", DEFAULT_MAX_PLAYERS)

    @property
    def motd(self) -> str:
        return self._string("motd", DEFAULT_MOTD)

    @property
    def favicon(self) -> str:
        return self._string("favicon", DEFAULT_FAVICON)


class ConfigManager:
    """Holds the configuration loaded from a server root directory."""

    def __init__(self, server_root: str | os.PathLike[str]) -> None:
        self._server_config = ServerConfig(server_root)

    @property
    def server_config(self) -> ServerConfig:
        return self._server_config