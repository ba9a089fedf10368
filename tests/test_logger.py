"""
Unit Tests for the stdlib logging bridge and logging setup
"""

import json
import logging
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from utils.logger import SeqLoggingFormatter, TextFormatter, setupLogging


def makeLogRecord(message='User %s logged in', args=('bob',), level=logging.INFO, exc_info=None):
    return logging.LogRecord('auth', level, __file__, 10, message, args, exc_info)


class TestSeqLoggingFormatter(unittest.TestCase):
    
    def setUp(self):
        self.formatter = SeqLoggingFormatter()
    
    def testBasicRecord(self):
        line = self.formatter.format(makeLogRecord())
        
        self.assertFalse(line.endswith('\n'))
        event = json.loads(line)
        self.assertEqual(event['@m'], 'User bob logged in')
        self.assertEqual(event['@l'], 'Information')
        self.assertEqual(event['Code'], 200)
        self.assertEqual(event['LevelName'], 'INFO')
        self.assertEqual(event['Channel'], 'auth')
        self.assertIn('@t', event)
    
    def testExtraAttributes(self):
        record = makeLogRecord()
        record.user_id = 42
        
        event = json.loads(self.formatter.format(record))
        
        self.assertEqual(event['UserId'], 42)
        self.assertNotIn('Lineno', event)
        self.assertNotIn('Args', event)
    
    def testContextAttribute(self):
        record = makeLogRecord()
        record.context = {'order_id': 7}
        
        event = json.loads(self.formatter.format(record))
        
        self.assertEqual(event['OrderId'], 7)
        self.assertNotIn('Context', event)
    
    def testExceptionInfo(self):
        try:
            raise ValueError('broken')
        except ValueError:
            record = makeLogRecord(message='failed', args=(), level=logging.ERROR, exc_info=sys.exc_info())
        
        event = json.loads(self.formatter.format(record))
        
        self.assertEqual(event['@l'], 'Error')
        self.assertTrue(event['@x'].startswith('class: ValueError'))
        self.assertNotIn('ExcInfo', event)
    
    def testNestedConfiguration(self):
        from clef.schema import FormatterConfig
        formatter = SeqLoggingFormatter(FormatterConfig(extractExtras=False))
        record = makeLogRecord()
        record.request_id = 'abc'
        
        event = json.loads(formatter.format(record))
        
        self.assertEqual(event['Extra'], {'RequestId': 'abc'})


class TestSetupLogging(unittest.TestCase):
    
    def setUp(self):
        self.rootLogger = logging.getLogger()
        self.savedHandlers = self.rootLogger.handlers[:]
        self.savedLevel = self.rootLogger.level
        self.addCleanup(self.restoreRoot)
    
    def restoreRoot(self):
        for handler in self.rootLogger.handlers:
            if handler not in self.savedHandlers:
                handler.close()
        self.rootLogger.handlers = self.savedHandlers
        self.rootLogger.setLevel(self.savedLevel)
    
    def testTextFormatByDefault(self):
        setupLogging({})
        
        self.assertEqual(len(self.rootLogger.handlers), 1)
        self.assertIsInstance(self.rootLogger.handlers[0].formatter, TextFormatter)
        self.assertEqual(self.rootLogger.level, logging.INFO)
    
    def testClefFormat(self):
        setupLogging({
            'logging': {'format': 'clef', 'output': 'stdout', 'level': 'debug'},
            'formatter': {'extract_context': False},
        })
        
        formatter = self.rootLogger.handlers[0].formatter
        self.assertIsInstance(formatter, SeqLoggingFormatter)
        self.assertFalse(formatter.clefFormatter.extractContext)
        self.assertEqual(self.rootLogger.level, logging.DEBUG)
    
    def testAnnouncesConfigurationAtInfo(self):
        with patch.object(self.rootLogger, 'info') as info:
            setupLogging({})
        
        info.assert_called_once_with('Logging configured successfully')
    
    def testFileAndConsole(self):
        with tempfile.TemporaryDirectory() as tempDir:
            logPath = Path(tempDir) / 'logs' / 'clef.log'
            
            setupLogging({'logging': {'output': 'both', 'file_path': str(logPath)}})
            
            self.assertEqual(len(self.rootLogger.handlers), 2)
            self.assertTrue(logPath.parent.exists())
            self.restoreRoot()


if __name__ == '__main__':
    unittest.main()
