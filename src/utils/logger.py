import logging
import sys
from pathlib import Path
from typing import Dict, Any, Optional
from datetime import datetime

from clef.compact_json import SeqCompactJsonFormatter
from clef.levels import fromPythonLevel
from clef.schema import FormatterConfig, LogRecord


# Attributes every stdlib LogRecord carries; anything else came from extra=
_RECORD_ATTRIBUTES = {
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname', 'filename',
    'module', 'exc_info', 'exc_text', 'stack_info', 'lineno', 'funcName',
    'created', 'msecs', 'relativeCreated', 'thread', 'threadName',
    'processName', 'process', 'taskName', 'message', 'asctime', 'context',
}


class SeqLoggingFormatter(logging.Formatter):
    """
    Bridges stdlib logging records to the CLEF formatter.

    The logger name becomes the channel, a handled exception becomes the
    ``exception`` context entry, a ``context`` mapping passed through
    ``extra=`` becomes the context and every other ``extra=`` key lands in
    the extra map.
    """
    
    def __init__(self, config: Optional[FormatterConfig] = None):
        super().__init__()
        config = config or FormatterConfig()
        
        # Handlers terminate lines themselves
        self.clefFormatter = SeqCompactJsonFormatter(
            config=FormatterConfig(
                extractContext=config.extractContext,
                extractExtras=config.extractExtras,
                maxNormalizeDepth=config.maxNormalizeDepth,
                maxNormalizeItemCount=config.maxNormalizeItemCount,
                appendNewline=False
            )
        )
    
    def toLogRecord(self, record: logging.LogRecord) -> LogRecord:
        context = dict(getattr(record, 'context', None) or {})
        
        if record.exc_info and record.exc_info[1] is not None:
            context['exception'] = record.exc_info[1]
        
        extra = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRIBUTES
        }
        
        return LogRecord(
            message=record.getMessage(),
            level=fromPythonLevel(record.levelno),
            levelName=record.levelname,
            channel=record.name,
            datetime=datetime.fromtimestamp(record.created).astimezone(),
            context=context,
            extra=extra
        )
    
    def format(self, record: logging.LogRecord) -> str:
        return self.clefFormatter.format(self.toLogRecord(record))


class TextFormatter(logging.Formatter):
    
    def __init__(self):
        fmt = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        datefmt = '%Y-%m-%d %H:%M:%S'
        super().__init__(fmt=fmt, datefmt=datefmt)


def setupLogging(config: Dict[str, Any]) -> None:
    logging_config = config.get('logging', {})
    
    log_level = logging_config.get('level', 'INFO')
    log_format = logging_config.get('format', 'text')  # clef or text
    log_output = logging_config.get('output', 'stderr')  # file, stdout, stderr or both
    log_file_path = logging_config.get('file_path', 'logs/clef.log')
    
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper()))
    
    root_logger.handlers = []
    
    if log_format == 'clef':
        formatter = SeqLoggingFormatter(FormatterConfig.fromDict(config.get('formatter')))
    else:
        formatter = TextFormatter()
    
    if log_output in ['file', 'both']:
        log_path = Path(log_file_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        
        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
    
    if log_output in ['stdout', 'stderr', 'both']:
        stream = sys.stdout if log_output == 'stdout' else sys.stderr
        console_handler = logging.StreamHandler(stream)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)
    
    root_logger.info("Logging configured successfully")
