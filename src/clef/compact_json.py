"""
Seq Compact JSON Formatter

Formats log records as CLEF (Compact Log Event Format) lines, one JSON object
per record, ready to be shipped to a Seq server.
"""

from collections.abc import Mapping
from dataclasses import replace
from datetime import datetime
from typing import Any, Iterable, Optional, Tuple, Union
import json
import logging

from dateutil import parser as dateParser

from .exception_normalizer import ExceptionNormalizer
from .exceptions import InvalidRecordError, WrongCodePathError
from .field_mapper import boundMapping, toJsonValue
from .levels import severityName
from .normalizer import FieldHooks, OutputBuilder, RecordNormalizer
from .schema import FormatterConfig, LogRecord


CONTENT_TYPE = 'application/vnd.serilog.clef'


class SeqCompactJsonFormatter(FieldHooks):
    """
    CLEF formatter.

    Context and extra maps are merged into the top level of each event by
    default; either can be nested under ``Context``/``Extra`` instead. The
    configuration is read-only while formatting, so one instance can serve
    concurrent callers as long as nobody calls the setters meanwhile.
    """

    def __init__(
        self,
        extractContext: bool = True,
        extractExtras: bool = True,
        maxNormalizeDepth: int = 9,
        maxNormalizeItemCount: int = 1000,
        appendNewline: bool = True,
        config: Optional[FormatterConfig] = None
    ):
        """
        Initialize the formatter.

        Args:
            extractContext: Merge context entries into the event root
            extractExtras: Merge extra entries into the event root
            maxNormalizeDepth: Deepest exception chain level to normalize
            maxNormalizeItemCount: Item cap for context/extra maps
            appendNewline: Terminate each formatted line with a newline
            config: Complete configuration, overrides the other arguments
        """
        self.config = config or FormatterConfig(
            extractContext=extractContext,
            extractExtras=extractExtras,
            maxNormalizeDepth=maxNormalizeDepth,
            maxNormalizeItemCount=maxNormalizeItemCount,
            appendNewline=appendNewline
        )
        self.logger = logging.getLogger(self.__class__.__name__)
        self.exceptionNormalizer = ExceptionNormalizer(self.config.maxNormalizeDepth)
        self.recordNormalizer = RecordNormalizer(self)

    def getContentType(self) -> str:
        return CONTENT_TYPE

    @property
    def extractContext(self) -> bool:
        return self.config.extractContext

    @extractContext.setter
    def extractContext(self, value: bool) -> None:
        self.config = replace(self.config, extractContext=bool(value))

    @property
    def extractExtras(self) -> bool:
        return self.config.extractExtras

    @extractExtras.setter
    def extractExtras(self, value: bool) -> None:
        self.config = replace(self.config, extractExtras=bool(value))

    def getExtractContext(self) -> bool:
        return self.extractContext

    def setExtractContext(self, value: bool) -> 'SeqCompactJsonFormatter':
        self.extractContext = value
        return self

    def getExtractExtras(self) -> bool:
        return self.extractExtras

    def setExtractExtras(self, value: bool) -> 'SeqCompactJsonFormatter':
        self.extractExtras = value
        return self

    def normalize(self, record: Union[LogRecord, Mapping]) -> Mapping:
        return self.recordNormalizer.normalize(record)

    def serialize(self, output: Mapping) -> str:
        line = json.dumps(dict(output), separators=(',', ':'), ensure_ascii=False, default=str)
        if self.config.appendNewline:
            line += '\n'
        return line

    def format(self, record: Union[LogRecord, Mapping]) -> str:
        """
        Format one record as a CLEF line.

        Args:
            record: LogRecord or mapping of raw record fields

        Returns:
            Single-line JSON object
        """
        return self.serialize(self.normalize(record))

    def formatBatch(self, records: Iterable[Any]) -> str:
        # One event per line; batching belongs to the transport
        raise WrongCodePathError()

    def processMessage(self, output: OutputBuilder, message: str) -> None:
        output.set('@m', message)
        if '{' in message:
            output.set('@mt', message)

    def processContext(self, output: OutputBuilder, context: Mapping) -> None:
        context, exception = self._extractException(context)
        if exception is not None:
            info = self.exceptionNormalizer.normalize(exception)
            output.set('@x', self.exceptionNormalizer.flatten(info))

        bounded = boundMapping(context, self.config.maxNormalizeItemCount, 'context')

        if self.config.extractContext:
            output.mergeUnder(bounded)
        else:
            output.set('Context', toJsonValue(bounded))

    def processLevel(self, output: OutputBuilder, level: int) -> None:
        output.set('@l', severityName(level))
        output.set('Code', level)

    def processLevelName(self, output: OutputBuilder, levelName: str) -> None:
        output.set('LevelName', levelName)

    def processChannel(self, output: OutputBuilder, channel: str) -> None:
        output.set('Channel', channel)

    def processDatetime(self, output: OutputBuilder, timestamp: Union[datetime, str]) -> None:
        if isinstance(timestamp, str):
            timestamp = dateParser.isoparse(timestamp)

        if not isinstance(timestamp, datetime):
            raise InvalidRecordError('datetime', timestamp, 'Date-time')

        if timestamp.tzinfo is None:
            timestamp = timestamp.astimezone()

        output.set('@t', timestamp.isoformat())

    def processExtra(self, output: OutputBuilder, extra: Mapping) -> None:
        bounded = boundMapping(extra, self.config.maxNormalizeItemCount, 'extra')

        if self.config.extractExtras:
            output.mergeUnder(bounded)
        else:
            output.set('Extra', toJsonValue(bounded))

    def _extractException(self, context: Any) -> Tuple[Any, Optional[BaseException]]:
        if not isinstance(context, Mapping) or 'exception' not in context:
            return context, None

        exception = context['exception']
        remaining = {key: value for key, value in context.items() if key != 'exception'}

        if not isinstance(exception, BaseException):
            self.logger.debug(f"Ignoring non-exception context entry: {type(exception).__name__}")
            return remaining, None

        return remaining, exception
