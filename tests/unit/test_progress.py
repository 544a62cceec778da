from __future__ import annotations

from unittest.mock import Mock, patch

from outage_report.services.progress import ProgressTracker, is_tty_enabled


def test_is_tty_enabled_returns_stdout_isatty():
    """Test that is_tty_enabled returns sys.stdout.isatty()."""
    with patch('sys.stdout.isatty', return_value=True):
        assert is_tty_enabled() is True

    with patch('sys.stdout.isatty', return_value=False):
        assert is_tty_enabled() is False


class TestProgressTracker:
    """Test cases for ProgressTracker class."""

    def test_init_with_tty_enabled(self):
        """Test ProgressTracker initialization when TTY is enabled."""
        with patch('outage_report.services.progress.is_tty_enabled', return_value=True), \
             patch('outage_report.services.progress.tqdm') as mock_tqdm:

            tracker = ProgressTracker(5, description="Test files")

            assert tracker.total_files == 5
            assert tracker.description == "Test files"
            assert tracker.current_file == 0
            assert tracker.enabled is True

            mock_tqdm.assert_called_once_with(
                total=5,
                desc="Test files",
                unit="file",
                leave=True,
                position=0,
                ncols=80,
                ascii=True,
            )

    def test_init_with_tty_disabled(self):
        """Test ProgressTracker initialization when TTY is disabled."""
        with patch('outage_report.services.progress.is_tty_enabled', return_value=False), \
             patch('outage_report.services.progress.tqdm') as mock_tqdm:
            tracker = ProgressTracker(5, description="Test files")

            assert tracker.enabled is False
            assert tracker.pbar is None
            mock_tqdm.assert_not_called()

    def test_start_and_finish_file_update_bar(self):
        """A finished file advances the bar and reports records and failures."""
        mock_pbar = Mock()
        with patch('outage_report.services.progress.is_tty_enabled', return_value=True), \
             patch('outage_report.services.progress.tqdm', return_value=mock_pbar):
            tracker = ProgressTracker(2)

            tracker.start_file("okt.xlsx")
            assert tracker.current_file == 1
            mock_pbar.set_description.assert_called_with("Processing files (okt.xlsx)")

            tracker.finish_file(success=False, records=0)
            assert tracker.failed_files == 1
            mock_pbar.update.assert_called_once_with(1)
            mock_pbar.set_postfix.assert_called_once_with(records=0, failed=1)
            mock_pbar.set_description.assert_called_with("Processing files")

    def test_finish_file_without_tty_counts_failures(self):
        """Failures are counted even when no bar is shown."""
        with patch('outage_report.services.progress.is_tty_enabled', return_value=False):
            tracker = ProgressTracker(3)
            tracker.start_file("a.xlsx")
            tracker.finish_file(success=True, records=4)
            tracker.finish_file(success=False)
            assert tracker.current_file == 1
            assert tracker.failed_files == 1

    def test_context_manager_closes_bar(self):
        """Test that leaving the context closes the bar once."""
        mock_pbar = Mock()
        with patch('outage_report.services.progress.is_tty_enabled', return_value=True), \
             patch('outage_report.services.progress.tqdm', return_value=mock_pbar):
            with ProgressTracker(1) as tracker:
                pass
            mock_pbar.close.assert_called_once()
            assert tracker.pbar is None
            tracker.close()
            mock_pbar.close.assert_called_once()
