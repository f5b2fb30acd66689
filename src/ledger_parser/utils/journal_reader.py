"""Loading journal files from disk and parsing them into entries."""

import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional

from ..models.core import AccountDirective, Entry, ParserConfig, Transaction
from ..parsers.base import Cursor, ParseError, StructuralError
from ..parsers.journal import iter_entries, parse_entry, skip_entry, skip_separators
from .error_handler import ErrorDetail, ErrorHandler, handle_file_access_error, handle_parse_error


logger = logging.getLogger(__name__)


@dataclass
class ReadResult:
    """Outcome of reading one journal file"""
    file_path: str
    entries: List[Entry] = field(default_factory=list)
    errors: List[ErrorDetail] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors

    @property
    def transactions_count(self) -> int:
        return sum(1 for e in self.entries if isinstance(e, Transaction))

    @property
    def directives_count(self) -> int:
        return sum(1 for e in self.entries if isinstance(e, AccountDirective))


class JournalReader:
    """Reads journal files and applies the configured error policy.

    With ``skip_invalid_entries`` off the first ParseError propagates to the
    caller. With it on, each malformed entry is recorded and skipped up to
    the next line that can start an entry.
    """

    def __init__(self, config: ParserConfig, error_handler: Optional[ErrorHandler] = None):
        self.config = config
        self.error_handler = error_handler or ErrorHandler(log_directory=None, enable_console=False)

    def scan_directory(self, directory: str, recursive: bool = True) -> List[str]:
        """
        Scan directory for journal files

        Args:
            directory: Directory path to scan
            recursive: Whether to scan subdirectories recursively

        Returns:
            Sorted list of file paths with a configured journal extension
        """
        if not os.path.exists(directory):
            raise FileNotFoundError(f"Directory not found: {directory}")

        if not os.path.isdir(directory):
            raise ValueError(f"Path is not a directory: {directory}")

        found_files = []

        if recursive:
            for root, dirs, files in os.walk(directory):
                for file in files:
                    file_path = os.path.join(root, file)
                    if self._is_journal_file(file_path):
                        found_files.append(file_path)
        else:
            for item in os.listdir(directory):
                item_path = os.path.join(directory, item)
                if os.path.isfile(item_path) and self._is_journal_file(item_path):
                    found_files.append(item_path)

        return sorted(found_files)

    def collect_files(self, paths: List[str], recursive: bool = True) -> List[str]:
        """Expand a mix of files and directories into journal file paths"""
        files = []
        for path in paths:
            if os.path.isdir(path):
                files.extend(self.scan_directory(path, recursive))
            else:
                files.append(path)
        return files

    def _is_journal_file(self, file_path: str) -> bool:
        _, ext = os.path.splitext(file_path.lower())
        return ext in self.config.journal_extensions

    def read_file(self, file_path: str) -> ReadResult:
        """Read and parse one journal file"""
        result = ReadResult(file_path)
        try:
            with open(file_path, 'r', encoding=self.config.encoding) as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            result.errors.append(handle_file_access_error(self.error_handler, file_path, e))
            return result

        result.entries, errors = self.read_text(text, file_path)
        result.errors.extend(errors)
        logger.info(
            f"Parsed {file_path}: {result.transactions_count} transactions, "
            f"{result.directives_count} directives, {len(result.errors)} errors"
        )
        return result

    def read_text(self, text: str, source_name: str = ""):
        """Parse journal text, returning (entries, recorded errors)"""
        if not self.config.skip_invalid_entries:
            return list(iter_entries(Cursor(text, 0, source_name))), []

        entries: List[Entry] = []
        errors: List[ErrorDetail] = []
        cursor = skip_separators(Cursor(text, 0, source_name))
        while not cursor.at_end:
            try:
                entry, rest = parse_entry(cursor)
                if not rest.at_end and rest.peek() not in '\r\n':
                    raise StructuralError("line break after entry", rest)
            except ParseError as e:
                errors.append(handle_parse_error(self.error_handler, e, source_name or None))
                logger.debug(f"Skipping malformed entry at offset {cursor.offset}")
                cursor = skip_separators(skip_entry(cursor))
                continue
            entries.append(entry)
            cursor = skip_separators(rest)
        return entries, errors
