"""Namespaced resource identifiers."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Identifier:
    """A resource name in a namespace, shown as ``namespace:name``."""

    namespace: str
    name: str

    @classmethod
    def parse(cls, text: str) -> Identifier:
        """Split ``text`` at its first ``/`` into namespace and name."""
        namespace, separator, name = text.partition("/")
        if not separator:
            raise ValueError(f"Could not create identifier from string: {text}")
        return cls(namespace, name)

    def __str__(self) -> str:
        return f"{self.namespace}:{self.name}"