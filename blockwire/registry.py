"""Ordered registries of values addressed by identifier or numeric entry."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Generic, Iterator, TypeVar

from blockwire.ident import Identifier
from blockwire.wire import PacketReader, PacketWriter, Var32

T = TypeVar("T")


class RegValue(ABC):
    """A value that can be sent to clients as registry data."""

    REGISTRY_ID: ClassVar[Identifier]

    @abstractmethod
    def to_registry_data_packet(self) -> Any:
        """Return the NBT describing this value, or None if it has none."""


@dataclass(frozen=True, repr=False)
class RegEntry(Generic[T]):
    """A numeric index into a registry; it is not checked against any registry."""

    id: int

    def __repr__(self) -> str:
        return f"RegEntry({self.id})"

    def lookup(self, registry: Registry[T] | RegistryFrozen[T]) -> T | None:
        return registry.lookup(self)

    def encode(self, writer: PacketWriter) -> None:
        Var32(self.id).encode(writer)

    @classmethod
    def decode(cls, reader: PacketReader) -> RegEntry:
        return cls(Var32.decode(reader).as_i32() & 0xFFFFFFFF)


class Registry(Generic[T]):
    """Values keyed by identifier, in insertion order, with named tags."""

    def __init__(self) -> None:
        self._values: dict[Identifier, T] = {}
        self._keys: list[Identifier] = []
        self._index: dict[Identifier, int] = {}
        self._tags: dict[Identifier, set[RegEntry[T]]] = {}

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[Identifier]:
        return iter(self._keys)

    def get(self, key: Identifier) -> T | None:
        return self._values.get(key)

    def get_entry(self, key: Identifier) -> RegEntry[T] | None:
        index = self._index.get(key)
        return None if index is None else RegEntry(index)

    def insert(self, key: Identifier, value: T) -> None:
        """Add or replace a value; a replaced value keeps its position."""
        if key not in self._index:
            self._index[key] = len(self._keys)
            self._keys.append(key)
        self._values[key] = value

    def map(self, key: Identifier, func: Callable[[T], T]) -> None:
        """Replace the value under ``key`` with ``func`` applied to it."""
        if key not in self._values:
            raise KeyError(key)
        self.insert(key, func(self._values[key]))

    def lookup(self, entry: RegEntry[T]) -> T | None:
        key = self.lookup_ident(entry)
        return None if key is None else self._values[key]

    def lookup_ident(self, entry: RegEntry[T]) -> Identifier | None:
        if 0 <= entry.id < len(self._keys):
            return self._keys[entry.id]
        return None

    def clear(self) -> None:
        """Remove every value; tags are kept."""
        self._values.clear()
        self._keys.clear()
        self._index.clear()

    def freeze(self) -> RegistryFrozen[T]:
        return RegistryFrozen(self)

    def keys(self) -> Iterator[Identifier]:
        return iter(list(self._keys))

    def entries(self) -> Iterator[tuple[Identifier, T]]:
        return ((key, self._values[key]) for key in list(self._keys))

    def insert_tag(self, tag: Identifier, entry: Identifier) -> None:
        """Add ``entry`` to ``tag``; the tag is created even if the entry is unknown."""
        found = self.get_entry(entry)
        members = self._tags.setdefault(tag, set())
        if found is not None:
            members.add(found)

    def get_tags(self, tag: Identifier) -> frozenset[RegEntry[T]] | None:
        members = self._tags.get(tag)
        return None if members is None else frozenset(members)

    def flatten_tags_for_packet(self) -> list[tuple[Identifier, list[int]]]:
        return [
            (tag, sorted(entry.id for entry in members))
            for tag, members in self._tags.items()
        ]

    def registry_data_entries(self) -> list[tuple[Identifier, Any]]:
        """Pair each key with the registry data of its value, in order."""
        return [(key, value.to_registry_data_packet()) for key, value in self.entries()]


class RegistryFrozen(Generic[T]):
    """A read-only view of a registry."""

    def __init__(self, registry: Registry[T]) -> None:
        self._registry = registry

    def __len__(self) -> int:
        return len(self._registry)

    def __contains__(self, key: object) -> bool:
        return key in self._registry

    def __iter__(self) -> Iterator[Identifier]:
        return iter(self._registry)

    def get(self, key: Identifier) -> T | None:
        return self._registry.get(key)

    def get_entry(self, key: Identifier) -> RegEntry[T] | None:
        return self._registry.get_entry(key)

    def lookup(self, entry: RegEntry[T]) -> T | None:
        return self._registry.lookup(entry)

    def lookup_ident(self, entry: RegEntry[T]) -> Identifier | None:
        return self._registry.lookup_ident(entry)

    def keys(self) -> Iterator[Identifier]:
        return self._registry.keys()

    def entries(self) -> Iterator[tuple[Identifier, T]]:
        return self._registry.entries()

    def get_tags(self, tag: Identifier) -> frozenset[RegEntry[T]] | None:
        return self._registry.get_tags(tag)

    def flatten_tags_for_packet(self) -> list[tuple[Identifier, list[int]]]:
        return self._registry.flatten_tags_for_packet()

    def registry_data_entries(self) -> list[tuple[Identifier, Any]]:
        return self._registry.registry_data_entries()