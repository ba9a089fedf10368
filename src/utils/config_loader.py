"""
Configuration Loader

Loads and validates formatter configuration from YAML files with environment
variable substitution.
"""

import yaml
import os
from pathlib import Path
from typing import Dict, Any
import re
import logging

from clef.schema import FormatterConfig


FORMATTER_FLAGS = ('extract_context', 'extract_extras', 'append_newline')
FORMATTER_LIMITS = ('max_normalize_depth', 'max_normalize_item_count')

ENV_VAR_PATTERN = re.compile(r'\$\{([^}]+)\}')


class ConfigLoader:
    """
    Reads the YAML configuration for the formatter and its logging.

    ``${VAR_NAME}`` placeholders are replaced from the environment before the
    YAML is parsed; unknown variables are left in place. Nested values are
    reachable with dotted keys such as ``formatter.extract_context``.
    """

    def __init__(self, config_path: str):
        self.config_path = Path(config_path)
        self.logger = logging.getLogger(self.__class__.__name__)
        self.config: Dict[str, Any] = {}

    def load(self) -> Dict[str, Any]:
        """
        Read, substitute and parse the configuration file.

        Returns:
            Parsed configuration, empty for an empty file

        Raises:
            FileNotFoundError: If the file does not exist
            yaml.YAMLError: If the file is not valid YAML
        """
        if not self.config_path.exists():
            raise FileNotFoundError(f"Config file not found: {self.config_path}")

        try:
            content = self._substituteEnvVars(self.config_path.read_text())
            self.config = yaml.safe_load(content) or {}
        except yaml.YAMLError as e:
            self.logger.error(f"Invalid YAML in {self.config_path}: {e}")
            raise

        self.logger.info(f"Configuration loaded from {self.config_path}")
        return self.config

    def _substituteEnvVars(self, content: str) -> str:
        def lookup(match):
            name = match.group(1)
            if name not in os.environ:
                self.logger.warning(f"Environment variable not found: {name}")
                return match.group(0)
            return os.environ[name]

        return ENV_VAR_PATTERN.sub(lookup, content)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Look up a dotted key, falling back to default when any part is missing
        or null.
        """
        value: Any = self.config

        for part in key.split('.'):
            if not isinstance(value, dict) or value.get(part) is None:
                return default
            value = value[part]

        return value

    def validate(self) -> bool:
        """
        Validate the formatter section.

        Returns:
            True if valid
        """
        section = self.get('formatter', {})
        if not isinstance(section, dict):
            self.logger.error("Configuration section 'formatter' must be a mapping")
            return False

        for key, value in section.items():
            if key in FORMATTER_FLAGS:
                if not isinstance(value, bool):
                    self.logger.error(f"formatter.{key} must be a boolean, got {value!r}")
                    return False
            elif key in FORMATTER_LIMITS:
                if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                    self.logger.error(f"formatter.{key} must be a non-negative integer, got {value!r}")
                    return False
            else:
                self.logger.error(f"Unknown formatter setting: {key}")
                return False

        return True

    def getFormatterConfig(self) -> FormatterConfig:
        """
        Build the formatter configuration.

        Raises:
            ValueError: If the formatter section fails validation
        """
        if not self.validate():
            raise ValueError(f"Invalid formatter configuration in {self.config_path}")

        return FormatterConfig.fromDict(self.get('formatter', {}))
