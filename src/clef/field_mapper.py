# Property name casing and size bounding for user-supplied context/extra maps

from collections.abc import Mapping, Sequence
from typing import Any, Dict, Iterable, Tuple, Union
import logging
import re

from .exceptions import InvalidRecordError


logger = logging.getLogger(__name__)

TRUNCATION_KEY = '...'
DEFAULT_MAX_ITEMS = 1000

_WORD_START = re.compile(r'(^|\s)(\S)')
# Canonical decimal integers, the same strings PHP turns into int array keys
_INTEGER_KEY = re.compile(r'^(0|-?[1-9][0-9]*)\Z')

Key = Union[int, str]


def toPascalCase(value: str) -> str:
    """
    Convert a snake-, kebab- or space-separated name to PascalCase.
    
    Only the first letter of each word is touched, so names that are already
    PascalCase come back unchanged.
    """
    if value is None:
        return ''
    
    spaced = str(value).replace('-', ' ').replace('_', ' ')
    capitalized = _WORD_START.sub(lambda match: match.group(1) + match.group(2).upper(), spaced)
    return capitalized.replace(' ', '')


def _isPositional(key: Any) -> bool:
    if isinstance(key, str):
        return _INTEGER_KEY.match(key) is not None
    return isinstance(key, int) and not isinstance(key, bool)


def _iterEntries(data: Any, fieldName: str) -> Iterable[Tuple[Any, Any]]:
    if isinstance(data, Mapping):
        return data.items()
    
    if isinstance(data, Sequence) and not isinstance(data, (str, bytes, bytearray)):
        return enumerate(data)
    
    raise InvalidRecordError(fieldName, data)


def boundMapping(
    data: Any,
    maxItems: int = DEFAULT_MAX_ITEMS,
    fieldName: str = 'mapping'
) -> Dict[Key, Any]:
    """
    Copy a user-supplied map, PascalCasing its keys and capping its size.
    
    Integer keys, and strings spelling a canonical integer such as "0" or
    "-3", become positional members numbered from zero in iteration order. Once ``maxItems - 1`` entries have been copied the rest is dropped
    and a ``"..."`` sentinel entry is appended.
    
    Args:
        data: Mapping (or list, treated as all-positional) to copy
        maxItems: Item cap, sentinel included
        fieldName: Name used in the error raised for non-mapping input
        
    Returns:
        New ordered dict with int keys for positional members
    """
    bounded: Dict[Key, Any] = {}
    position = 0
    
    for count, (key, value) in enumerate(_iterEntries(data, fieldName), 1):
        if count >= maxItems:
            bounded[TRUNCATION_KEY] = f"Over {maxItems} items, aborting normalization"
            logger.debug(f"Truncated {fieldName} at {maxItems} items")
            break
        
        if _isPositional(key):
            bounded[position] = value
            position += 1
        else:
            bounded[toPascalCase(key)] = value
    
    return bounded


def toJsonValue(bounded: Dict[Key, Any]) -> Union[Dict[Key, Any], list]:
    """Return a list when every member is positional, the dict otherwise."""
    if bounded and all(_isPositional(key) for key in bounded):
        return list(bounded.values())
    
    return bounded
