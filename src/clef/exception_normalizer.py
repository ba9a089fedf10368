"""
Exception Normalization

Flattens an exception and its causal chain into a depth-bounded dict, and
renders that dict as the free-text block CLEF expects under ``@x``.
"""

from typing import Dict, Any, List, Optional, Protocol, runtime_checkable
import json
import logging
import os
import traceback


@runtime_checkable
class SelfSerializing(Protocol):
    """Exceptions that know how to describe themselves."""

    def toDict(self) -> Dict[str, Any]:
        ...


class ExceptionNormalizer:

    # Attributes carried by SOAP-style fault objects
    TRANSPORT_FIELDS = ('faultcode', 'faultactor', 'detail')

    def __init__(self, maxDepth: int = 9):
        self.maxDepth = maxDepth
        self.logger = logging.getLogger(self.__class__.__name__)

    def normalize(self, error: BaseException, depth: int = 0) -> Dict[str, Any]:
        """
        Normalize an exception into a plain dict.

        Args:
            error: Exception to normalize
            depth: Position in the causal chain, 0 for the outermost error

        Returns:
            Dict with class, message, code, file, optional transport fields,
            trace and previous; or a one-entry sentinel past the depth limit
        """
        if depth > self.maxDepth:
            self.logger.debug(f"Exception chain truncated at depth {depth}")
            return {'...': f"Over {self.maxDepth} levels deep, aborting normalization"}

        if isinstance(error, SelfSerializing):
            return dict(error.toDict())

        data: Dict[str, Any] = {
            'class': self._className(error),
            'message': str(error),
            'code': self._code(error),
            'file': self._location(error),
        }

        self._addTransportFields(error, data)

        trace = self._trace(error)
        if trace:
            data['trace'] = trace

        previous = self._cause(error)
        if previous is not None:
            data['previous'] = self.normalize(previous, depth + 1)

        return data

    def flatten(self, info: Dict[str, Any]) -> str:
        """Render a normalized exception as ``key: value`` lines."""
        info = dict(info)

        previous = info.get('previous')
        if isinstance(previous, dict):
            previous = dict(previous)
            if isinstance(previous.get('trace'), list):
                previous['trace'] = os.linesep.join(previous['trace'])

            info['previous'] = ''.join(
                f"\t{key}: {self._scalar(value)}{os.linesep}"
                for key, value in previous.items()
            )

        if isinstance(info.get('trace'), list):
            info['trace'] = os.linesep.join(info['trace'])

        return ''.join(
            f"{key}: {self._scalar(value)}{os.linesep}"
            for key, value in info.items()
        )

    def _scalar(self, value: Any) -> str:
        if isinstance(value, (dict, list, tuple)):
            return json.dumps(value, separators=(',', ':'), ensure_ascii=False, default=str)
        return str(value)

    def _className(self, error: BaseException) -> str:
        cls = type(error)
        if cls.__module__ == 'builtins':
            return cls.__qualname__
        return f"{cls.__module__}.{cls.__qualname__}"

    def _code(self, error: BaseException) -> int:
        for attribute in ('code', 'errno'):
            value = getattr(error, attribute, None)
            if isinstance(value, int) and not isinstance(value, bool):
                return value
        return 0

    def _location(self, error: BaseException) -> str:
        frames = traceback.extract_tb(error.__traceback__) if error.__traceback__ else []
        if not frames:
            return '<unknown>:0'

        frame = frames[-1]
        return f"{frame.filename}:{frame.lineno}"

    def _trace(self, error: BaseException) -> List[str]:
        if error.__traceback__ is None:
            return []

        # Raise site is already reported as 'file'; remaining frames most recent first
        frames = traceback.extract_tb(error.__traceback__)[:-1]
        return [
            f"{frame.filename}:{frame.lineno}"
            for frame in reversed(frames)
            if frame.filename and not frame.filename.startswith('<')
        ]

    def _addTransportFields(self, error: BaseException, data: Dict[str, Any]) -> None:
        for name in self.TRANSPORT_FIELDS:
            value = getattr(error, name, None)
            if value is None:
                continue

            if isinstance(value, str):
                data[name] = value
            elif name == 'detail':
                data[name] = json.dumps(value, ensure_ascii=False, default=str)
            else:
                data[name] = value

    def _cause(self, error: BaseException) -> Optional[BaseException]:
        if error.__cause__ is not None:
            return error.__cause__
        if error.__suppress_context__:
            return None
        return error.__context__
