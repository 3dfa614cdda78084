"""
Tests for atomic writer - temp write → fsync → replace.
Simulated interruption tests to verify atomicity.
"""

import pytest
import tempfile
import json
import math
from datetime import date
from pathlib import Path
from unittest.mock import patch

from reports.atomic_writer import (
    write_text_atomic,
    write_json_atomic,
    AtomicWriteError
)


class TestAtomicWriter:
    """Tests for atomic text writing."""

    def test_write_text_atomic_success(self):
        """Test successful atomic write."""
        content = '{"factor": "Top300"}\n'

        with tempfile.TemporaryDirectory() as temp_dir:
            output_path = Path(temp_dir) / 'dashboard.json'

            result = write_text_atomic(content, output_path)

            assert result['status'] == 'completed'
            assert result['output_path'] == str(output_path)
            assert result['bytes_written'] == len(content)

            with open(output_path, 'r', encoding='utf-8') as f:
                assert f.read() == content

    def test_bytes_written_counts_utf8(self):
        content = "Trough +6M → 12.34%"

        with tempfile.TemporaryDirectory() as temp_dir:
            result = write_text_atomic(content, Path(temp_dir) / 'label.txt')

            assert result['bytes_written'] == len(content.encode('utf-8'))
            assert result['bytes_written'] > len(content)

    def test_write_text_atomic_creates_directory(self):
        """Test that atomic write creates parent directories."""
        with tempfile.TemporaryDirectory() as temp_dir:
            output_path = Path(temp_dir) / 'public' / 'data' / 'dashboard.json'

            result = write_text_atomic("{}", output_path)

            assert result['status'] == 'completed'
            assert output_path.exists()

    def test_write_text_atomic_overwrites_existing(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            output_path = Path(temp_dir) / 'dashboard.json'
            output_path.write_text("old", encoding='utf-8')

            write_text_atomic("new", output_path)

            assert output_path.read_text(encoding='utf-8') == "new"

    def test_write_text_atomic_temp_file_cleanup(self):
        """No temporary files remain after a successful write."""
        with tempfile.TemporaryDirectory() as temp_dir:
            write_text_atomic("content", Path(temp_dir) / 'dashboard.json')

            assert list(Path(temp_dir).glob('*.tmp')) == []

    @patch('os.fsync')
    def test_write_text_atomic_fsync_called(self, mock_fsync):
        """Test that fsync is called for durability."""
        with tempfile.TemporaryDirectory() as temp_dir:
            write_text_atomic("content", Path(temp_dir) / 'dashboard.json')

            mock_fsync.assert_called_once()


class TestAtomicitySimulation:
    """Tests for atomicity under simulated failures."""

    @patch('os.replace')
    def test_replace_failure_keeps_original(self, mock_replace):
        """A failed rename leaves the old file intact and no temp file behind."""
        mock_replace.side_effect = OSError("Simulated rename failure")

        with tempfile.TemporaryDirectory() as temp_dir:
            output_path = Path(temp_dir) / 'dashboard.json'
            output_path.write_text("original", encoding='utf-8')

            with pytest.raises(AtomicWriteError, match="Simulated rename failure"):
                write_text_atomic("replacement", output_path)

            assert output_path.read_text(encoding='utf-8') == "original"
            assert list(Path(temp_dir).glob('*.tmp')) == []

    def test_parent_is_a_file(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            blocker = Path(temp_dir) / 'blocker'
            blocker.write_text("file", encoding='utf-8')

            with pytest.raises(AtomicWriteError, match="Cannot create"):
                write_text_atomic("content", blocker / 'dashboard.json')


class TestJsonWriter:
    """Tests for write_json_atomic function."""

    def test_write_json_round_trip(self):
        payload = {
            'settings': {'start': '2003-01-01', 'risk_free_rate': 0.02},
            'metrics': [{'factor': 'Top300', 'sharpe': None, 'maxdd': -0.25}]
        }

        with tempfile.TemporaryDirectory() as temp_dir:
            output_path = Path(temp_dir) / 'dashboard.json'

            result = write_json_atomic(payload, output_path)

            assert result['status'] == 'completed'
            with open(output_path, 'r', encoding='utf-8') as f:
                assert json.load(f) == payload

    def test_non_finite_floats_become_null(self):
        payload = {'values': [1.0, math.nan, math.inf, -math.inf], 'nested': {'x': (math.nan,)}}

        with tempfile.TemporaryDirectory() as temp_dir:
            output_path = Path(temp_dir) / 'dashboard.json'

            write_json_atomic(payload, output_path)

            text = output_path.read_text(encoding='utf-8')
            assert 'NaN' not in text
            assert 'Infinity' not in text
            assert json.loads(text) == {'values': [1.0, None, None, None], 'nested': {'x': [None]}}

    def test_unknown_types_use_str(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            output_path = Path(temp_dir) / 'dashboard.json'

            write_json_atomic({'as_of': date(2024, 3, 29)}, output_path)

            assert json.loads(output_path.read_text(encoding='utf-8')) == {'as_of': '2024-03-29'}
