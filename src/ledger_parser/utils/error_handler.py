"""Error collection and structured logging for journal processing."""

import json
import logging
import traceback
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Any
from dataclasses import dataclass, asdict
import sys

from ..parsers.base import LexicalError, ParseError


class ErrorSeverity(Enum):
    """Error severity levels"""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Error categories for classification"""
    FILE_ACCESS = "file_access"
    LEXICAL = "lexical"
    STRUCTURAL = "structural"
    CONFIGURATION = "configuration"
    SYSTEM = "system"


@dataclass
class ErrorDetail:
    """Detailed error information"""
    timestamp: str
    severity: str
    category: str
    error_code: str
    message: str
    file_path: Optional[str] = None
    line_number: Optional[int] = None
    column_number: Optional[int] = None
    expected: Optional[str] = None
    found: Optional[str] = None
    stack_trace: Optional[str] = None
    context: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return asdict(self)


class JSONFormatter(logging.Formatter):
    """One JSON object per log record"""

    def format(self, record):
        log_entry = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno
        }

        for extra in ('error_code', 'file_path', 'category', 'context'):
            if hasattr(record, extra):
                log_entry[extra] = getattr(record, extra)

        return json.dumps(log_entry, default=str)


class ErrorHandler:
    """Collects parse and file errors and logs them"""

    ERROR_CODES = {
        # File access errors
        "FILE_NOT_FOUND": "F001",
        "FILE_PERMISSION_DENIED": "F002",
        "ENCODING_ERROR": "F003",
        "DIRECTORY_NOT_FOUND": "F004",

        # Grammar errors
        "LEXICAL_ERROR": "P001",
        "STRUCTURAL_ERROR": "P002",

        # Configuration errors
        "CONFIG_FILE_NOT_FOUND": "C001",
        "INVALID_CONFIG_FORMAT": "C002",

        "UNEXPECTED_ERROR": "S999"
    }

    def __init__(self, log_directory: Optional[str] = "logs", enable_console: bool = True):
        self.log_directory = Path(log_directory) if log_directory else None
        if self.log_directory:
            self.log_directory.mkdir(parents=True, exist_ok=True)

        self.errors: List[ErrorDetail] = []
        self.warnings: List[ErrorDetail] = []

        self._setup_logging(enable_console)

    def _setup_logging(self, enable_console: bool):
        """Set up structured JSON logging"""
        self.logger = logging.getLogger('ledger_parser.errors')
        self.logger.setLevel(logging.DEBUG)

        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        if self.log_directory:
            log_file = self.log_directory / f"parser_{datetime.now().strftime('%Y%m%d')}.jsonl"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(JSONFormatter())
            self.logger.addHandler(file_handler)

        # Console handler for human-readable logs
        if enable_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(logging.WARNING)
            console_handler.setFormatter(logging.Formatter('%(levelname)s - %(message)s'))
            self.logger.addHandler(console_handler)

    def log_error(self,
                  message: str,
                  error_type: str,
                  category: ErrorCategory = ErrorCategory.SYSTEM,
                  file_path: Optional[str] = None,
                  line_number: Optional[int] = None,
                  column_number: Optional[int] = None,
                  expected: Optional[str] = None,
                  found: Optional[str] = None,
                  exception: Optional[Exception] = None,
                  context: Optional[Dict[str, Any]] = None) -> ErrorDetail:
        """Log an error with detailed information"""

        error_code = self.ERROR_CODES.get(error_type, "S999")
        stack_trace = None

        if exception is not None and not isinstance(exception, ParseError):
            stack_trace = ''.join(traceback.format_exception(
                type(exception), exception, exception.__traceback__
            ))

        error_detail = ErrorDetail(
            timestamp=datetime.now().isoformat(),
            severity=ErrorSeverity.ERROR.value,
            category=category.value,
            error_code=error_code,
            message=message,
            file_path=file_path,
            line_number=line_number,
            column_number=column_number,
            expected=expected,
            found=found,
            stack_trace=stack_trace,
            context=context or {}
        )

        self.errors.append(error_detail)

        self.logger.error(
            message,
            extra={
                'error_code': error_code,
                'category': category.value,
                'file_path': file_path,
                'context': context or {}
            }
        )

        return error_detail

    def log_warning(self,
                    message: str,
                    warning_type: str,
                    category: ErrorCategory = ErrorCategory.SYSTEM,
                    file_path: Optional[str] = None,
                    context: Optional[Dict[str, Any]] = None) -> ErrorDetail:
        """Log a warning with detailed information"""

        warning_code = self.ERROR_CODES.get(warning_type, "W999")

        warning_detail = ErrorDetail(
            timestamp=datetime.now().isoformat(),
            severity=ErrorSeverity.WARNING.value,
            category=category.value,
            error_code=warning_code,
            message=message,
            file_path=file_path,
            context=context or {}
        )

        self.warnings.append(warning_detail)

        self.logger.warning(
            message,
            extra={
                'error_code': warning_code,
                'category': category.value,
                'file_path': file_path,
                'context': context or {}
            }
        )

        return warning_detail

    def log_info(self, message: str, context: Optional[Dict[str, Any]] = None):
        self.logger.info(message, extra={'context': context or {}})

    def get_error_summary(self) -> Dict[str, Any]:
        """Get summary of all errors and warnings"""
        errors_by_category: Dict[str, int] = {}
        for error in self.errors:
            errors_by_category[error.category] = errors_by_category.get(error.category, 0) + 1

        return {
            'total_errors': len(self.errors),
            'total_warnings': len(self.warnings),
            'errors_by_category': errors_by_category,
            'files_with_errors': len(set(e.file_path for e in self.errors if e.file_path)),
        }

    def generate_error_report(self, output_file: Optional[str] = None) -> str:
        """Write a JSON report of all errors and warnings"""
        if output_file is None:
            directory = self.log_directory or Path('.')
            output_file = str(directory / f"error_report_{datetime.now().strftime('%Y%m%d_%H%M%S')}.json")

        report = {
            'report_timestamp': datetime.now().isoformat(),
            'summary': self.get_error_summary(),
            'all_errors': [error.to_dict() for error in self.errors],
            'all_warnings': [warning.to_dict() for warning in self.warnings]
        }

        with open(output_file, 'w', encoding='utf-8') as f:
            json.dump(report, f, indent=2, default=str)

        self.log_info(f"Error report generated: {output_file}")
        return output_file

    def clear_errors(self):
        self.errors.clear()
        self.warnings.clear()

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def get_errors_for_file(self, file_path: str) -> List[ErrorDetail]:
        return [error for error in self.errors if error.file_path == file_path]


def handle_file_access_error(error_handler: ErrorHandler,
                             file_path: str,
                             exception: Exception) -> ErrorDetail:
    """Handle common file access errors"""
    if isinstance(exception, FileNotFoundError):
        return error_handler.log_error(
            f"File not found: {file_path}",
            "FILE_NOT_FOUND",
            ErrorCategory.FILE_ACCESS,
            file_path=file_path,
            exception=exception
        )
    elif isinstance(exception, PermissionError):
        return error_handler.log_error(
            f"Permission denied accessing file: {file_path}",
            "FILE_PERMISSION_DENIED",
            ErrorCategory.FILE_ACCESS,
            file_path=file_path,
            exception=exception
        )
    elif isinstance(exception, UnicodeDecodeError):
        return error_handler.log_error(
            f"Cannot decode file {file_path}: {exception.reason}",
            "ENCODING_ERROR",
            ErrorCategory.FILE_ACCESS,
            file_path=file_path,
            exception=exception
        )
    else:
        return error_handler.log_error(
            f"File access error: {str(exception)}",
            "UNEXPECTED_ERROR",
            ErrorCategory.FILE_ACCESS,
            file_path=file_path,
            exception=exception
        )


def handle_parse_error(error_handler: ErrorHandler,
                       error: ParseError,
                       file_path: Optional[str] = None) -> ErrorDetail:
    """Record a grammar failure with its position"""
    if isinstance(error, LexicalError):
        error_type, category = "LEXICAL_ERROR", ErrorCategory.LEXICAL
    else:
        error_type, category = "STRUCTURAL_ERROR", ErrorCategory.STRUCTURAL

    return error_handler.log_error(
        str(error),
        error_type,
        category,
        file_path=file_path or error.source_name or None,
        line_number=error.line,
        column_number=error.column,
        expected=error.expected,
        found=error.found,
        exception=error
    )
