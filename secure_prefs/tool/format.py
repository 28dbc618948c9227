"""Library for formatting object values."""

from abc import ABC, abstractmethod
from typing import Any

import sys
from typing import TextIO
import yaml
import json


class StructFormatter(ABC):
    """A formatter that prints objects."""

    @abstractmethod
    def print(self, data: Any, file: TextIO = sys.stdout) -> None:
        """Print the data objects."""


class YamlFormatter(StructFormatter):
    """A formatter that prints a yaml document."""

    def print(self, data: Any, file: TextIO = sys.stdout) -> None:
        """Format the data objects."""
        print(
            yaml.safe_dump(data, sort_keys=False, explicit_start=True),
            end="",
            file=file,
        )


class JsonFormatter(StructFormatter):
    """A formatter that prints json output."""

    def print(self, data: Any, file: TextIO = sys.stdout) -> None:
        """Format the data objects."""
        json.dump(data, sort_keys=False, indent=4, fp=file)
        print(file=file)


FORMATTERS: dict[str, type[StructFormatter]] = {
    "yaml": YamlFormatter,
    "json": JsonFormatter,
}
