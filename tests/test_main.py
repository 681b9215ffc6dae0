"""
Tests for the command line entry point.
"""

import io
import logging
from datetime import date, datetime, timezone
from unittest.mock import patch

import pytest

from commit_heatmap.errors import InvalidYearError, RepositoryError
from commit_heatmap.main import EXIT_FAILURE, EXIT_SUCCESS, main, parse_year
from conftest import add_commit, drop_objects, point_branch_at_missing_commit, requires_git


def fixed_clock():
    return date(2023, 6, 15)


def run_main(argv):
    stdout = io.StringIO()
    stderr = io.StringIO()
    code = main(argv, clock=fixed_clock, stdout=stdout, stderr=stderr)
    return code, stdout.getvalue(), stderr.getvalue()


class BrokenStream(io.StringIO):
    def write(self, text):
        raise BrokenPipeError(32, "Broken pipe")


def midday(year, month, day):
    return datetime(year, month, day, 12, tzinfo=timezone.utc)


class TestParseYear:
    """Tests for year validation."""

    def test_valid_year(self):
        assert parse_year("2024") == 2024

    def test_surrounding_whitespace(self):
        assert parse_year(" 1999 ") == 1999

    @pytest.mark.parametrize("text", ["abc", "20x4", "", "2023.5"])
    def test_non_numeric(self, text):
        with pytest.raises(InvalidYearError, match="expected a number"):
            parse_year(text)

    @pytest.mark.parametrize("text", ["0", "-5", "10000"])
    def test_out_of_range(self, text):
        with pytest.raises(InvalidYearError, match="must be between"):
            parse_year(text)


class TestMain:
    """Tests for main() with a stubbed history reader."""

    @patch("commit_heatmap.main.read_commit_timestamps")
    def test_success(self, mock_read):
        mock_read.return_value = [midday(2023, 3, 1), midday(2023, 3, 1), midday(2023, 8, 20)]

        code, out, err = run_main(["--repo", "/work/project", "--year", "2023", "--color", "never"])

        assert code == EXIT_SUCCESS
        assert err == ""
        assert "Repo: /work/project" in out
        assert "Year: 2023" in out
        assert "Total: 3 commits on 2 days" in out
        mock_read.assert_called_once_with("/work/project")

    @patch("commit_heatmap.main.read_commit_timestamps")
    def test_defaults(self, mock_read):
        """Repo defaults to the current directory, year to the clock's year."""
        mock_read.return_value = []

        code, out, _ = run_main(["--color", "never"])

        assert code == EXIT_SUCCESS
        assert "Year: 2023" in out
        mock_read.assert_called_once_with(".")

    @patch("commit_heatmap.main.read_commit_timestamps")
    def test_short_flags(self, mock_read):
        mock_read.return_value = []

        code, out, _ = run_main(["-r", "elsewhere", "-y", "2024", "--color", "never"])

        assert code == EXIT_SUCCESS
        assert "Year: 2024" in out
        mock_read.assert_called_once_with("elsewhere")

    @patch("commit_heatmap.main.read_commit_timestamps")
    def test_invalid_year_fails_before_repository_access(self, mock_read):
        code, out, err = run_main(["--year", "abc"])

        assert code == EXIT_FAILURE
        assert out == ""
        assert "InvalidYearError" in err
        mock_read.assert_not_called()

    @patch("commit_heatmap.main.read_commit_timestamps")
    def test_negative_year(self, mock_read):
        code, out, err = run_main(["--year", "-5"])

        assert code == EXIT_FAILURE
        assert out == ""
        assert "InvalidYearError" in err
        mock_read.assert_not_called()

    @patch("commit_heatmap.main.read_commit_timestamps")
    def test_repository_error(self, mock_read):
        mock_read.side_effect = RepositoryError("Not a git repository: /tmp/x")

        code, out, err = run_main(["--year", "2023"])

        assert code == EXIT_FAILURE
        assert out == ""
        assert "RepositoryError: Not a git repository" in err

    def test_nonexistent_path(self):
        code, out, err = run_main(["--repo", "/nonexistent/commit-heatmap-test", "--year", "2023"])

        assert code == EXIT_FAILURE
        assert out == ""
        assert "RepositoryError" in err

    @patch("commit_heatmap.main.read_commit_timestamps")
    def test_render_error(self, mock_read):
        mock_read.return_value = []
        stderr = io.StringIO()

        code = main(["--color", "never"], clock=fixed_clock, stdout=BrokenStream(), stderr=stderr)

        assert code == EXIT_FAILURE
        assert "RenderError" in stderr.getvalue()

    @patch("commit_heatmap.main.read_commit_timestamps")
    def test_monday_week_start(self, mock_read):
        mock_read.return_value = []

        code, out, _ = run_main(["--week-start", "monday", "--color", "never"])
        rows = out.splitlines()[4:11]

        assert code == EXIT_SUCCESS
        assert rows[0].startswith("Mon")
        assert rows[6].startswith("Sun")

    @patch("commit_heatmap.main.read_commit_timestamps")
    def test_relative_scale(self, mock_read):
        # Fixed thresholds would make both days MAX
        mock_read.return_value = [midday(2023, 4, 4)] * 40 + [midday(2023, 9, 9)] * 8

        code, out, _ = run_main(["--scale", "relative", "--color", "never"])

        assert code == EXIT_SUCCESS
        assert out.count("█") == 2  # one cell plus the legend
        assert out.count("░") == 2

    @patch("commit_heatmap.main.read_commit_timestamps")
    def test_always_color(self, mock_read, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        mock_read.return_value = []

        code, out, _ = run_main(["--color", "always"])

        assert code == EXIT_SUCCESS
        assert "\x1b[" in out

    @patch("commit_heatmap.main.read_commit_timestamps")
    def test_auto_color_on_non_terminal_is_plain(self, mock_read, monkeypatch):
        monkeypatch.delenv("FORCE_COLOR", raising=False)
        mock_read.return_value = []

        code, out, _ = run_main([])

        assert code == EXIT_SUCCESS
        assert "\x1b[" not in out

    @patch("commit_heatmap.config.HEATMAP_WEEK_START", "friday")
    def test_invalid_configuration(self):
        code, out, err = run_main(["--year", "2023"])

        assert code == EXIT_FAILURE
        assert out == ""
        assert "Error: ConfigurationError: Invalid configuration" in err
        assert "HEATMAP_WEEK_START" in err

    @patch("commit_heatmap.main.read_commit_timestamps")
    @patch("commit_heatmap.config.HEATMAP_WEEK_START", "friday")
    def test_invalid_year_reported_before_configuration(self, mock_read):
        code, out, err = run_main(["--year", "abc"])

        assert code == EXIT_FAILURE
        assert out == ""
        assert "Error: InvalidYearError:" in err
        assert "HEATMAP_WEEK_START" not in err
        mock_read.assert_not_called()

    @patch("commit_heatmap.main.read_commit_timestamps")
    def test_verbose_logs_go_to_each_calls_stderr(self, mock_read):
        mock_read.return_value = []

        for _ in range(2):
            _, _, err = run_main(["-v", "--color", "never"])
            assert "Using thresholds" in err

        _, _, err = run_main(["--color", "never"])
        assert err == ""

    @patch("commit_heatmap.main.read_commit_timestamps")
    def test_log_handler_removed_after_run(self, mock_read):
        mock_read.return_value = []
        package_logger = logging.getLogger("commit_heatmap")
        handlers = list(package_logger.handlers)
        level = package_logger.level

        run_main(["-v", "--color", "never"])

        assert package_logger.handlers == handlers
        assert package_logger.level == level


@requires_git
class TestMainWithRepository:
    """End-to-end runs against a real repository."""

    def test_renders_leap_day(self, git_repo):
        add_commit(git_repo, midday(2024, 2, 29))
        add_commit(git_repo, midday(2024, 2, 29))
        add_commit(git_repo, midday(2023, 12, 1))

        code, out, err = run_main(
            ["--repo", git_repo.working_tree_dir, "--year", "2024", "--color", "never"]
        )

        assert code == EXIT_SUCCESS, err
        assert "Total: 2 commits on 1 day" in out

    def test_empty_repository(self, git_repo):
        code, out, _ = run_main(["--repo", git_repo.working_tree_dir, "--color", "never"])

        assert code == EXIT_SUCCESS
        assert "Total: 0 commits on 0 days" in out

    def test_missing_objects_fail(self, git_repo):
        add_commit(git_repo, midday(2023, 3, 3))
        drop_objects(git_repo)

        code, out, err = run_main(["--repo", git_repo.working_tree_dir, "--color", "never"])

        assert code == EXIT_FAILURE
        assert out == ""
        assert "Error: RepositoryError:" in err

    def test_dangling_branch_fails(self, git_repo):
        add_commit(git_repo, midday(2023, 3, 3))
        point_branch_at_missing_commit(git_repo)

        code, out, err = run_main(["--repo", git_repo.working_tree_dir, "--color", "never"])

        assert code == EXIT_FAILURE
        assert out == ""
        assert "Error: RepositoryError:" in err
