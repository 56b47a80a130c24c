"""
Tests for console and file handlers.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler

from rabbitmq_http_client.core.logging.filters import CorrelationIdFilter
from rabbitmq_http_client.core.logging.formatters import TextFormatter
from rabbitmq_http_client.core.logging.handlers import create_console_handler, create_file_handler


def test_console_handler():
    handler = create_console_handler(logging.DEBUG, TextFormatter(), [CorrelationIdFilter()])

    assert handler.stream is sys.stdout
    assert handler.level == logging.DEBUG
    assert isinstance(handler.formatter, TextFormatter)
    assert len(handler.filters) == 1


def test_file_handler_creates_directory(tmp_path):
    log_file = tmp_path / "logs" / "nested" / "client.log"

    handler = create_file_handler(str(log_file), logging.INFO, TextFormatter(), max_bytes=1024, backup_count=2)
    try:
        assert isinstance(handler, RotatingFileHandler)
        assert log_file.parent.is_dir()
        assert handler.maxBytes == 1024
        assert handler.backupCount == 2
    finally:
        handler.close()
