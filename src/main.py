"""
CLEF Formatter CLI

Reads JSON-lines log records and writes one CLEF event per record to stdout.
"""

import sys
import json
import logging
from pathlib import Path
from typing import Callable, Optional, TextIO

import click
import yaml

# Add src to path
sys.path.insert(0, str(Path(__file__).parent))

from utils.config_loader import ConfigLoader
from utils.logger import setupLogging
from clef.compact_json import SeqCompactJsonFormatter
from clef.exceptions import ClefFormatterError
from clef.schema import FormatterConfig, LogRecord


class ClefFormatPipeline:
    """
    Formats a stream of JSON-lines records.

    Each input line is a JSON object with message, level, level_name, channel,
    datetime, context and extra. Lines that fail to parse or format are logged
    and skipped.
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the pipeline.

        Args:
            config_path: Path to YAML configuration file, defaults apply if None

        Raises:
            FileNotFoundError: If config file not found
            ValueError: If config validation fails
        """
        self.config = {}
        formatterConfig = FormatterConfig()

        if config_path:
            self.config_loader = ConfigLoader(config_path)
            self.config = self.config_loader.load()
            formatterConfig = self.config_loader.getFormatterConfig()

        setupLogging(self.config)
        self.logger = logging.getLogger(self.__class__.__name__)

        self.formatter = SeqCompactJsonFormatter(config=formatterConfig)
        self.formatted = 0
        self.failed = 0

    def formatLine(self, line: str) -> str:
        record = LogRecord.fromDict(json.loads(line))
        return self.formatter.format(record).rstrip('\n')

    def run(self, source: TextIO, emit: Callable[[str], None]) -> bool:
        """
        Format every record in source.

        Returns:
            True if every non-empty line was formatted
        """
        for lineNumber, line in enumerate(source, 1):
            if not line.strip():
                continue

            try:
                emit(self.formatLine(line))
                self.formatted += 1
            except (json.JSONDecodeError, KeyError, TypeError, ValueError, ClefFormatterError) as e:
                self.logger.error(f"Line {lineNumber}: {e}")
                self.failed += 1

        self.logger.info(f"Formatted {self.formatted} record(s), {self.failed} failed")
        return self.failed == 0


@click.command()
@click.option(
    '--config',
    default=None,
    type=click.Path(dir_okay=False),
    help='Path to configuration file'
)
@click.option(
    '--nest-context',
    is_flag=True,
    help='Nest context under "Context" instead of merging it into the event'
)
@click.option(
    '--nest-extras',
    is_flag=True,
    help='Nest extra data under "Extra" instead of merging it into the event'
)
@click.argument('input_file', type=click.File('r'), default='-')
def cli(config, nest_context, nest_extras, input_file):
    """Format JSON-lines log records as CLEF events"""

    try:
        pipeline = ClefFormatPipeline(config)

        if nest_context:
            pipeline.formatter.setExtractContext(False)
        if nest_extras:
            pipeline.formatter.setExtractExtras(False)

        success = pipeline.run(input_file, click.echo)
        sys.exit(0 if success else 1)

    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        click.echo(f"Error: Invalid configuration - {e}", err=True)
        sys.exit(1)


if __name__ == '__main__':
    cli()
