"""
CLEF Formatting Module

Formats structured log records as Seq Compact Log Event Format lines.

Features:
- Fixed severity table for numeric level codes
- PascalCase property names
- Bounded normalization of context/extra maps
- Depth-bounded exception chain flattening
"""

from .compact_json import SeqCompactJsonFormatter, CONTENT_TYPE
from .exception_normalizer import ExceptionNormalizer, SelfSerializing
from .exceptions import (
    ClefFormatterError,
    InvalidRecordError,
    UnknownFieldError,
    UnknownLevelError,
    WrongCodePathError,
)
from .field_mapper import boundMapping, toPascalCase
from .levels import fromPythonLevel, severityName
from .normalizer import FieldHooks, OutputBuilder, RecordNormalizer
from .schema import FormatterConfig, LogRecord

__all__ = [
    'SeqCompactJsonFormatter',
    'CONTENT_TYPE',
    'ExceptionNormalizer',
    'SelfSerializing',
    'ClefFormatterError',
    'InvalidRecordError',
    'UnknownFieldError',
    'UnknownLevelError',
    'WrongCodePathError',
    'boundMapping',
    'toPascalCase',
    'fromPythonLevel',
    'severityName',
    'FieldHooks',
    'OutputBuilder',
    'RecordNormalizer',
    'FormatterConfig',
    'LogRecord',
]
