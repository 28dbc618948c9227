"""Entries held by a native store and their on-disk representation."""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from mashumaro import DataClassDictMixin
from mashumaro.codecs.yaml import yaml_decode, yaml_encode


class NativeKind(StrEnum):
    """Value kinds a native store holds directly."""

    BOOLEAN = "boolean"
    INT = "int"
    LONG = "long"
    FLOAT = "float"
    STRING = "string"


@dataclass(frozen=True)
class Entry(DataClassDictMixin):
    """A value and the native kind it was written with."""

    kind: NativeKind
    value: Any


@dataclass
class StoreFile(DataClassDictMixin):
    """Contents of a store file."""

    entries: dict[str, Entry] = field(default_factory=dict)

    @classmethod
    def parse_yaml(cls, content: str) -> "StoreFile":
        """Parse the serialized store file."""
        if not content.strip():
            return cls()
        return yaml_decode(content, cls)

    def yaml(self) -> str:
        """Return the YAML representation written to disk."""
        return yaml_encode(self, self.__class__)  # type: ignore[return-value]
