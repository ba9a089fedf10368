from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Any, Mapping, Optional, Union


@dataclass(frozen=True)
class FormatterConfig:
    """
    Formatter settings, fixed for the lifetime of one config object.
    
    extractContext/extractExtras choose between merging the normalized
    context/extra maps into the top level of the output or nesting them under
    ``Context``/``Extra``.
    """
    extractContext: bool = True
    extractExtras: bool = True
    maxNormalizeDepth: int = 9
    maxNormalizeItemCount: int = 1000
    appendNewline: bool = True
    
    @classmethod
    def fromDict(cls, data: Optional[Dict[str, Any]]) -> 'FormatterConfig':
        data = data or {}
        defaults = cls()
        
        return cls(
            extractContext=bool(data.get('extract_context', defaults.extractContext)),
            extractExtras=bool(data.get('extract_extras', defaults.extractExtras)),
            maxNormalizeDepth=int(data.get('max_normalize_depth', defaults.maxNormalizeDepth)),
            maxNormalizeItemCount=int(data.get('max_normalize_item_count', defaults.maxNormalizeItemCount)),
            appendNewline=bool(data.get('append_newline', defaults.appendNewline))
        )


@dataclass
class LogRecord:
    message: str
    level: int
    levelName: str
    channel: str
    datetime: Union[datetime, str]
    context: Mapping[Any, Any] = field(default_factory=dict)
    extra: Mapping[Any, Any] = field(default_factory=dict)
    
    def toDict(self) -> Dict[str, Any]:
        """Raw record fields keyed by their wire names."""
        return {
            'message': self.message,
            'context': self.context,
            'level': self.level,
            'level_name': self.levelName,
            'channel': self.channel,
            'datetime': self.datetime,
            'extra': self.extra,
        }
    
    @classmethod
    def fromDict(cls, data: Dict[str, Any]) -> 'LogRecord':
        return cls(
            message=data['message'],
            level=data['level'],
            levelName=data.get('level_name', ''),
            channel=data.get('channel', ''),
            datetime=data['datetime'],
            context=data.get('context', {}),
            extra=data.get('extra', {})
        )
