"""Tests for the command-line interface."""

import json
import os

from click.testing import CliRunner

from ledger_parser.cli import cli


VALID_JOURNAL = """account Assets:Bank

2016/01/31 * Salary
    Assets:Bank    1,000.00 EUR
    Income:Salary

2016/02/01 Rent
    Expenses:Rent  EUR 500
    Assets:Bank
"""

BROKEN_JOURNAL = """2016/01/31 Good
    Assets:Bank  1 $
    Income

2016/13/01 Bad month
    Assets:Bank  1 $
"""


class TestCLI:
    """Test cases for CLI commands"""

    def setup_method(self):
        self.runner = CliRunner()

    def _write(self, name, text):
        with open(name, 'w', encoding='utf-8') as f:
            f.write(text)

    def test_check_valid_journal(self):
        with self.runner.isolated_filesystem():
            self._write('book.ledger', VALID_JOURNAL)

            result = self.runner.invoke(cli, ['check', 'book.ledger'])

            assert result.exit_code == 0
            assert "✓ book.ledger: 2 transactions, 1 directives" in result.output

    def test_check_reports_errors(self):
        with self.runner.isolated_filesystem():
            self._write('broken.ledger', BROKEN_JOURNAL)

            result = self.runner.invoke(cli, ['check', 'broken.ledger'])

            assert result.exit_code == 1
            assert "✗ broken.ledger: 1 errors" in result.output
            assert "broken.ledger:5:6: expected month between 1 and 12" in result.output

    def test_check_with_skip_config(self):
        """Test that skip_invalid_entries keeps the good entries"""
        with self.runner.isolated_filesystem():
            self._write('broken.ledger', BROKEN_JOURNAL)
            self._write('config.json', json.dumps({"skip_invalid_entries": True}))

            result = self.runner.invoke(cli, ['-c', 'config.json', 'check', 'broken.ledger'])

            assert result.exit_code == 1
            assert "✗ broken.ledger: 1 errors" in result.output

    def test_check_directory(self):
        with self.runner.isolated_filesystem():
            os.makedirs('books/2016')
            self._write('books/a.ledger', VALID_JOURNAL)
            self._write('books/2016/b.journal', VALID_JOURNAL)
            self._write('books/readme.txt', 'not a journal')

            recursive = self.runner.invoke(cli, ['check', 'books'])
            flat = self.runner.invoke(cli, ['check', '--no-recursive', 'books'])

            assert recursive.exit_code == 0
            assert recursive.output.count("✓") == 2
            assert flat.output.count("✓") == 1

    def test_check_missing_file(self):
        with self.runner.isolated_filesystem():
            result = self.runner.invoke(cli, ['check', 'missing.ledger'])

            assert result.exit_code == 1
            assert "File not found: missing.ledger" in result.output

    def test_export(self):
        with self.runner.isolated_filesystem():
            self._write('book.ledger', VALID_JOURNAL)

            result = self.runner.invoke(cli, ['export', 'book.ledger'])

            output_path = os.path.join('data', 'postings.csv')
            assert result.exit_code == 0
            assert f"✓ Exported 4 postings from 1 files to {output_path}" in result.output
            assert os.path.exists(output_path)

    def test_export_without_postings(self):
        with self.runner.isolated_filesystem():
            self._write('accounts.ledger', "account Assets:Bank\n")

            result = self.runner.invoke(cli, ['export', 'accounts.ledger', '-o', 'out.csv'])

            assert result.exit_code == 1
            assert "✗ No postings to export" in result.output
            assert not os.path.exists('out.csv')

    def test_expr(self):
        result = self.runner.invoke(cli, ['expr', '(1 * 5 + 2)'])

        assert result.exit_code == 0
        assert result.output == "(+ (* 1 5) 2)\n"

    def test_expr_error(self):
        result = self.runner.invoke(cli, ['expr', '1 +'])

        assert result.exit_code == 1
        assert "✗ <expression>:1:4: expected operand, found end of input" in result.output

    def test_init_config(self):
        with self.runner.isolated_filesystem():
            result = self.runner.invoke(cli, ['init-config'])

            assert result.exit_code == 0
            assert "✓ Configuration template generated: ledger_parser.json" in result.output
            with open('ledger_parser.json') as f:
                assert json.load(f)["encoding"] == "utf-8"

    def test_init_config_yaml(self):
        with self.runner.isolated_filesystem():
            result = self.runner.invoke(cli, ['init-config', 'settings.json', '--format', 'yaml'])

            assert result.exit_code == 0
            assert os.path.exists('settings.yml')
