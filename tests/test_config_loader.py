"""
Unit Tests for configuration loading
"""

import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from clef.schema import FormatterConfig
from utils.config_loader import ConfigLoader


class TestConfigLoader(unittest.TestCase):
    
    def setUp(self):
        self.tempDir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tempDir.cleanup)
    
    def writeConfig(self, content):
        path = Path(self.tempDir.name) / 'config.yaml'
        path.write_text(content)
        return str(path)
    
    def testLoadAndGet(self):
        loader = ConfigLoader(self.writeConfig(
            "formatter:\n"
            "  extract_context: false\n"
            "logging:\n"
            "  level: DEBUG\n"
        ))
        
        config = loader.load()
        
        self.assertEqual(config['logging']['level'], 'DEBUG')
        self.assertFalse(loader.get('formatter.extract_context'))
        self.assertEqual(loader.get('formatter.missing', 'fallback'), 'fallback')
        self.assertEqual(loader.get('logging.level.deeper', 'fallback'), 'fallback')
    
    def testEnvironmentSubstitution(self):
        loader = ConfigLoader(self.writeConfig("logging:\n  level: ${CLEF_TEST_LEVEL}\n"))
        
        with patch.dict(os.environ, {'CLEF_TEST_LEVEL': 'WARNING'}):
            loader.load()
        
        self.assertEqual(loader.get('logging.level'), 'WARNING')
    
    def testMissingVariableIsKept(self):
        loader = ConfigLoader(self.writeConfig("logging:\n  level: ${CLEF_TEST_UNSET_VAR}\n"))
        
        with patch.dict(os.environ, {}, clear=False):
            os.environ.pop('CLEF_TEST_UNSET_VAR', None)
            loader.load()
        
        self.assertEqual(loader.get('logging.level'), '${CLEF_TEST_UNSET_VAR}')
    
    def testEmptyFile(self):
        loader = ConfigLoader(self.writeConfig(''))
        
        self.assertEqual(loader.load(), {})
        self.assertEqual(loader.getFormatterConfig(), FormatterConfig())
    
    def testNullFormatterSectionUsesDefaults(self):
        loader = ConfigLoader(self.writeConfig("formatter:\nlogging:\n  level: INFO\n"))
        loader.load()
        
        self.assertTrue(loader.validate())
        self.assertEqual(loader.getFormatterConfig(), FormatterConfig())
    
    def testNonMappingDocumentUsesDefaults(self):
        loader = ConfigLoader(self.writeConfig("- just\n- a list\n"))
        loader.load()
        
        self.assertIsNone(loader.get('formatter.extract_context'))
        self.assertEqual(loader.getFormatterConfig(), FormatterConfig())
    
    def testMissingFile(self):
        loader = ConfigLoader(os.path.join(self.tempDir.name, 'absent.yaml'))
        
        with self.assertRaises(FileNotFoundError):
            loader.load()
    
    def testFormatterConfig(self):
        loader = ConfigLoader(self.writeConfig(
            "formatter:\n"
            "  extract_context: false\n"
            "  extract_extras: true\n"
            "  max_normalize_depth: 4\n"
            "  max_normalize_item_count: 50\n"
            "  append_newline: false\n"
        ))
        loader.load()
        
        config = loader.getFormatterConfig()
        
        self.assertEqual(config, FormatterConfig(
            extractContext=False,
            extractExtras=True,
            maxNormalizeDepth=4,
            maxNormalizeItemCount=50,
            appendNewline=False
        ))
    
    def testInvalidFlag(self):
        loader = ConfigLoader(self.writeConfig("formatter:\n  extract_context: 'yes please'\n"))
        loader.load()
        
        self.assertFalse(loader.validate())
        with self.assertRaises(ValueError):
            loader.getFormatterConfig()
    
    def testInvalidLimit(self):
        loader = ConfigLoader(self.writeConfig("formatter:\n  max_normalize_depth: -1\n"))
        loader.load()
        
        self.assertFalse(loader.validate())
    
    def testUnknownSetting(self):
        loader = ConfigLoader(self.writeConfig("formatter:\n  pretty_print: true\n"))
        loader.load()
        
        self.assertFalse(loader.validate())


if __name__ == '__main__':
    unittest.main()
