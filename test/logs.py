"""
Logging helper behavioral tests (rich handler installation).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import io
import logging
import unittest
from unittest import TestCase

from rich.console import Console
from rich.logging import RichHandler

from herald import logs


class TestLogs(TestCase):
    """Behavioral tests for handler() and configure()."""

    def tearDown(self):
        logger = logging.getLogger("herald")
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)

    def testHandlerIsRich(self):
        handler = logs.handler(logging.DEBUG)
        self.assertIsInstance(handler, RichHandler)
        self.assertEqual(handler.level, logging.DEBUG)

    def testConfigureReplacesPreviousHandler(self):
        logs.configure(logging.INFO)
        logger = logs.configure(logging.DEBUG)
        self.assertEqual(logger.name, "herald")
        self.assertEqual(len(logger.handlers), 1)
        self.assertEqual(logger.level, logging.DEBUG)

    def testRecordsReachConsole(self):
        console = Console(file=io.StringIO(), width=120, color_system=None)
        logs.configure(logging.INFO, console=console)
        logging.getLogger("herald.registry").info("registered 3 commands")
        self.assertIn("registered 3 commands", console.file.getvalue())


if __name__ == "__main__":
    unittest.main()
