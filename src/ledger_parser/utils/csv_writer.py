"""CSV export of parsed postings."""

import os
import csv
import logging
from typing import Dict, Iterable, Iterator, List

from ..models.core import Entry, ParserConfig, Posting, Transaction


logger = logging.getLogger(__name__)


class CSVWriter:
    """Flattens transactions into one CSV row per posting"""

    STANDARD_HEADERS = [
        'date',
        'state',
        'title',
        'account',
        'amount',
        'commodity',
        'notes'
    ]

    def __init__(self, config: ParserConfig):
        self.config = config

    def write_postings(self, entries: Iterable[Entry], output_path: str) -> bool:
        """
        Write the postings of all transactions to a CSV file

        Args:
            entries: Parsed journal entries; directives are ignored
            output_path: Path where the CSV file should be written

        Returns:
            True if at least one row was written, False otherwise
        """
        rows = list(self.iter_rows(entries))
        if not rows:
            return False

        try:
            output_dir = os.path.dirname(output_path)
            if output_dir:
                os.makedirs(output_dir, exist_ok=True)

            with open(output_path, 'w', newline='', encoding='utf-8') as csvfile:
                writer = csv.DictWriter(csvfile, fieldnames=self.STANDARD_HEADERS)
                writer.writeheader()
                writer.writerows(rows)

        except (OSError, csv.Error) as e:
            logger.error(f"Error writing postings to {output_path}: {e}")
            return False

        logger.info(f"Wrote {len(rows)} postings to {output_path}")
        return True

    def iter_rows(self, entries: Iterable[Entry]) -> Iterator[Dict[str, str]]:
        for entry in entries:
            if not isinstance(entry, Transaction):
                continue
            for posting in entry.postings:
                yield self._posting_to_dict(entry, posting)

    def _posting_to_dict(self, transaction: Transaction, posting: Posting) -> Dict[str, str]:
        notes: List[str] = [note.text for note in posting.notes]
        return {
            'date': str(transaction.date),
            'state': transaction.state.name.lower() if transaction.state else '',
            'title': transaction.title,
            'account': posting.account,
            'amount': str(posting.amount.number) if posting.amount else '',
            'commodity': posting.amount.commodity if posting.amount else '',
            'notes': '; '.join(notes)
        }
