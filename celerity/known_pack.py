"""Data packs that client and server may both already have."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class KnownPack:
    """A data pack identified by namespace, id and version."""

    namespace: str
    pack_id: str
    version: str

    def __str__(self) -> str:
        return f"({self.namespace}:{self.pack_id}, version {self.version})"