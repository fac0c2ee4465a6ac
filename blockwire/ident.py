"""Namespaced identifiers such as ``minecraft:stone``."""

from __future__ import annotations

from dataclasses import dataclass

from blockwire.wire import PacketReader, PacketWriter

VANILLA_NAMESPACE = "minecraft"


@dataclass(frozen=True, repr=False)
class Identifier:
    """A ``namespace:path`` resource location."""

    namespace: str
    path: str

    @classmethod
    def vanilla(cls, path: str) -> Identifier:
        return cls(VANILLA_NAMESPACE, path)

    @classmethod
    def parse(cls, value: str) -> Identifier:
        """Split at the first colon; without one the namespace is the vanilla one."""
        namespace, sep, path = value.partition(":")
        if not sep:
            return cls.vanilla(value)
        return cls(namespace, path)

    def __str__(self) -> str:
        return f"{self.namespace}:{self.path}"

    def __repr__(self) -> str:
        return f"Identifier({str(self)!r})"

    def encode(self, writer: PacketWriter) -> None:
        writer.write_string(str(self))

    @classmethod
    def decode(cls, reader: PacketReader) -> Identifier:
        return cls.parse(reader.read_string())