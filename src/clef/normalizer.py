# Record normalization: routes each record field to its transform hook

from abc import ABC, abstractmethod
from collections.abc import Mapping
from datetime import datetime
from types import MappingProxyType
from typing import Dict, Any, Callable, Union

from .exceptions import InvalidRecordError, UnknownFieldError
from .field_mapper import toPascalCase
from .schema import LogRecord


class OutputBuilder:
    """
    Output map under construction for a single record.

    Owned by one format call. ``build()`` hands back a read-only view.
    """

    def __init__(self):
        self._data: Dict[Union[int, str], Any] = {}

    def __contains__(self, key) -> bool:
        return key in self._data

    def __getitem__(self, key):
        return self._data[key]

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    def mergeUnder(self, entries: Mapping) -> None:
        """
        Merge entries into the top level without overwriting existing keys.

        Entries come first in key order; positional members of both sides
        are renumbered from zero.
        """
        merged: Dict[Union[int, str], Any] = {}
        position = 0

        for source in (entries, self._data):
            for key, value in source.items():
                if isinstance(key, int) and not isinstance(key, bool):
                    merged[position] = value
                    position += 1
                else:
                    merged[key] = value

        self._data = merged

    def build(self) -> Mapping:
        return MappingProxyType(dict(self._data))


class FieldHooks(ABC):
    """Per-field transforms a concrete output format has to provide."""

    @abstractmethod
    def processMessage(self, output: OutputBuilder, message: str) -> None:
        pass

    @abstractmethod
    def processContext(self, output: OutputBuilder, context: Mapping) -> None:
        pass

    @abstractmethod
    def processLevel(self, output: OutputBuilder, level: int) -> None:
        pass

    @abstractmethod
    def processLevelName(self, output: OutputBuilder, levelName: str) -> None:
        pass

    @abstractmethod
    def processChannel(self, output: OutputBuilder, channel: str) -> None:
        pass

    @abstractmethod
    def processDatetime(self, output: OutputBuilder, timestamp: Union[datetime, str]) -> None:
        pass

    @abstractmethod
    def processExtra(self, output: OutputBuilder, extra: Mapping) -> None:
        pass


FieldHandler = Callable[[FieldHooks, OutputBuilder, Any], None]

FIELD_HANDLERS: Dict[str, FieldHandler] = {
    'Message': lambda hooks, output, value: hooks.processMessage(output, value),
    'Context': lambda hooks, output, value: hooks.processContext(output, value),
    'Level': lambda hooks, output, value: hooks.processLevel(output, value),
    'LevelName': lambda hooks, output, value: hooks.processLevelName(output, value),
    'Channel': lambda hooks, output, value: hooks.processChannel(output, value),
    'Datetime': lambda hooks, output, value: hooks.processDatetime(output, value),
    'Extra': lambda hooks, output, value: hooks.processExtra(output, value),
}


class RecordNormalizer:

    def __init__(self, hooks: FieldHooks):
        self.hooks = hooks

    def normalize(self, record: Union[LogRecord, Mapping]) -> Mapping:
        """
        Normalize one log record into an output map.

        Args:
            record: LogRecord, or a mapping of raw field name to value

        Returns:
            Read-only output map, keys in the order the hooks wrote them

        Raises:
            InvalidRecordError: If the record is not a mapping
            UnknownFieldError: If a field has no registered handler
        """
        if isinstance(record, LogRecord):
            record = record.toDict()

        if not isinstance(record, Mapping):
            raise InvalidRecordError('record', record)

        output = OutputBuilder()

        for fieldName, value in record.items():
            canonical = toPascalCase(fieldName)
            handler = FIELD_HANDLERS.get(canonical)

            if handler is None:
                raise UnknownFieldError(canonical)

            handler(self.hooks, output, value)

        return output.build()
