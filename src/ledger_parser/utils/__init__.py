"""Utility functions and helpers"""

from .config_manager import ConfigManager, get_default_config_manager
from .csv_writer import CSVWriter
from .error_handler import ErrorHandler, ErrorCategory, ErrorSeverity, handle_file_access_error, handle_parse_error
from .journal_reader import JournalReader, ReadResult

__all__ = [
    'ConfigManager',
    'get_default_config_manager',
    'CSVWriter',
    'ErrorHandler',
    'ErrorCategory',
    'ErrorSeverity',
    'handle_file_access_error',
    'handle_parse_error',
    'JournalReader',
    'ReadResult',
]
