"""Tests for artisan_runner.cli module."""

import json
from unittest.mock import MagicMock, patch

import pytest

from artisan_runner.catalog import TASKS
from artisan_runner.cli import build_parser, main
from artisan_runner.errors import PickerError
from artisan_runner.preferences import CONFIG_ENV_VAR


@pytest.fixture
def prefs(tmp_path, monkeypatch):
    """Point the preference store at a temp file."""
    path = tmp_path / "config" / "artisan-runner.json"
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
    monkeypatch.setenv("NO_COLOR", "1")
    return path


@pytest.fixture
def project(tmp_path):
    root = tmp_path / "project"
    root.mkdir()
    (root / "artisan").write_text("<?php\n")
    return root


@pytest.fixture
def mock_run():
    with patch("artisan_runner.executor.subprocess.run") as run:
        run.return_value = MagicMock(returncode=0)
        yield run


def _ran(mock_run) -> list[list[str]]:
    return [c.args[0] for c in mock_run.call_args_list]


class TestParser:
    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.path == "."
        assert args.numbers == ""
        assert not args.use_last
        assert not args.no_color
        assert not args.no_save

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            build_parser().parse_args(["--version"])
        assert exc.value.code == 0
        assert "artisan-runner" in capsys.readouterr().out


class TestNumbersMode:
    def test_runs_deduplicated_selection(self, prefs, project, mock_run, capsys):
        code = main(["--path", str(project), "--numbers", "2,4,2"])
        assert code == 0
        assert _ran(mock_run) == [list(TASKS[1].argv), list(TASKS[3].argv)]
        for call in mock_run.call_args_list:
            assert call.kwargs["cwd"] == project.resolve()
        out = capsys.readouterr().out
        assert f"Project path: {project.resolve()}" in out
        assert "All selected commands executed." in out

    def test_zero_runs_everything(self, prefs, project, mock_run):
        assert main(["--path", str(project), "--numbers", "0"]) == 0
        assert _ran(mock_run) == [list(t.argv) for t in TASKS]

    def test_out_of_range_is_fatal(self, prefs, project, mock_run, capsys):
        assert main(["--path", str(project), "--numbers", "5"]) == 1
        mock_run.assert_not_called()
        assert "choice out of range: 5" in capsys.readouterr().out

    def test_invalid_token_is_fatal(self, prefs, project, mock_run, capsys):
        assert main(["--path", str(project), "--numbers", "1,x"]) == 1
        mock_run.assert_not_called()
        assert "invalid number: 'x'" in capsys.readouterr().out

    def test_empty_selection_is_fatal(self, prefs, project, mock_run, capsys):
        assert main(["--path", str(project), "--numbers", " , "]) == 1
        mock_run.assert_not_called()
        assert "no commands selected" in capsys.readouterr().out

    def test_numbers_beats_use_last(self, prefs, project, mock_run):
        prefs.parent.mkdir(parents=True)
        prefs.write_text(json.dumps({"last_selections": [1], "saved_at": ""}))
        assert main(["--path", str(project), "--numbers", "3", "--use-last"]) == 0
        assert _ran(mock_run) == [list(TASKS[2].argv)]


class TestPersistence:
    def test_selection_is_saved(self, prefs, project, mock_run):
        main(["--path", str(project), "--numbers", "3,1"])
        data = json.loads(prefs.read_text())
        assert data["last_selections"] == [3, 1]
        assert data["saved_at"]

    def test_no_save(self, prefs, project, mock_run):
        main(["--path", str(project), "--numbers", "1", "--no-save"])
        assert not prefs.exists()

    def test_save_failure_is_warned_not_fatal(
        self, tmp_path, project, mock_run, monkeypatch, capsys
    ):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(blocker / "prefs.json"))
        assert main(["--path", str(project), "--numbers", "1"]) == 0
        assert "Could not save selection" in capsys.readouterr().out
        assert mock_run.call_count == 1


    def test_config_flag_overrides_env(self, prefs, tmp_path, project, mock_run):
        explicit = tmp_path / "explicit.json"
        main(["--path", str(project), "--numbers", "2", "--config", str(explicit)])
        assert json.loads(explicit.read_text())["last_selections"] == [2]
        assert not prefs.exists()

    def test_use_last_reads_config_flag_path(self, prefs, tmp_path, project, mock_run):
        explicit = tmp_path / "explicit.json"
        explicit.write_text(json.dumps({"last_selections": [3], "saved_at": ""}))
        assert main(["--path", str(project), "--use-last", "--config", str(explicit)]) == 0
        assert _ran(mock_run) == [list(TASKS[2].argv)]


class TestUseLast:
    def test_runs_saved_selection(self, prefs, project, mock_run):
        main(["--path", str(project), "--numbers", "4,2"])
        mock_run.reset_mock()
        assert main(["--path", str(project), "--use-last"]) == 0
        assert _ran(mock_run) == [list(TASKS[3].argv), list(TASKS[1].argv)]

    def test_missing_file_is_fatal(self, prefs, project, mock_run, capsys):
        assert main(["--path", str(project), "--use-last"]) == 1
        mock_run.assert_not_called()
        assert "no last selections saved" in capsys.readouterr().out

    def test_empty_saved_selection_is_fatal(self, prefs, project, mock_run, capsys):
        prefs.parent.mkdir(parents=True)
        prefs.write_text(json.dumps({"last_selections": [], "saved_at": ""}))
        assert main(["--path", str(project), "--use-last"]) == 1
        assert "no last selections saved" in capsys.readouterr().out

    def test_malformed_file_is_fatal(self, prefs, project, mock_run, capsys):
        prefs.parent.mkdir(parents=True)
        prefs.write_text("{oops")
        assert main(["--path", str(project), "--use-last"]) == 1
        mock_run.assert_not_called()
        assert "could not load last selections" in capsys.readouterr().out

    def test_non_utf8_file_is_fatal(self, prefs, project, mock_run, capsys):
        prefs.parent.mkdir(parents=True)
        prefs.write_bytes(b"\xff\xfe{garbage")
        assert main(["--path", str(project), "--use-last"]) == 1
        mock_run.assert_not_called()
        assert "could not load last selections" in capsys.readouterr().out

    def test_stale_saved_index_is_skipped(self, prefs, project, mock_run, capsys):
        prefs.parent.mkdir(parents=True)
        prefs.write_text(json.dumps({"last_selections": [7, 1], "saved_at": ""}))
        assert main(["--path", str(project), "--use-last"]) == 0
        assert _ran(mock_run) == [list(TASKS[0].argv)]
        assert "Skipping invalid index: 7" in capsys.readouterr().out


class TestInteractive:
    def test_picker_receives_last_selection(self, prefs, project, mock_run):
        prefs.parent.mkdir(parents=True)
        prefs.write_text(json.dumps({"last_selections": [2], "saved_at": ""}))
        with patch("artisan_runner.cli.pick_tasks", return_value=[1, 3]) as picker:
            assert main(["--path", str(project)]) == 0
        picker.assert_called_once_with(TASKS, [2])
        assert _ran(mock_run) == [list(TASKS[0].argv), list(TASKS[2].argv)]

    def test_picker_without_saved_file(self, prefs, project, mock_run):
        with patch("artisan_runner.cli.pick_tasks", return_value=[4]) as picker:
            assert main(["--path", str(project)]) == 0
        picker.assert_called_once_with(TASKS, None)

    def test_unreadable_file_means_no_preselection(self, prefs, project, mock_run):
        prefs.parent.mkdir(parents=True)
        prefs.write_bytes(b"\xff\xfe{garbage")
        with patch("artisan_runner.cli.pick_tasks", return_value=[2]) as picker:
            assert main(["--path", str(project)]) == 0
        picker.assert_called_once_with(TASKS, None)
        assert json.loads(prefs.read_text())["last_selections"] == [2]

    def test_picker_failure_is_fatal(self, prefs, project, mock_run, capsys):
        with patch("artisan_runner.cli.pick_tasks", side_effect=PickerError("selection cancelled")):
            assert main(["--path", str(project)]) == 1
        mock_run.assert_not_called()
        assert "selection cancelled" in capsys.readouterr().out


class TestProjectPath:
    def test_missing_marker_warns_but_runs(self, prefs, tmp_path, mock_run, capsys):
        assert main(["--path", str(tmp_path), "--numbers", "1"]) == 0
        assert "artisan not found in the given path" in capsys.readouterr().out
        assert mock_run.call_count == 1

    def test_marker_present_no_warning(self, prefs, project, mock_run, capsys):
        main(["--path", str(project), "--numbers", "1"])
        assert "not found" not in capsys.readouterr().out

    def test_unresolvable_path_is_fatal(self, prefs, mock_run, capsys):
        with patch("artisan_runner.config.Path.resolve", side_effect=OSError("gone")):
            assert main(["--numbers", "1"]) == 1
        mock_run.assert_not_called()
        assert "unable to resolve path" in capsys.readouterr().out


class TestTaskFailures:
    def test_failures_do_not_abort_or_change_exit(self, prefs, project, mock_run, capsys):
        mock_run.side_effect = [
            FileNotFoundError(2, "No such file or directory", "php"),
            MagicMock(returncode=1),
            MagicMock(returncode=0),
        ]
        assert main(["--path", str(project), "--numbers", "1,2,3"]) == 0
        assert mock_run.call_count == 3
        out = capsys.readouterr().out
        assert out.count("Error running") == 2
        assert "All selected commands executed." in out

    def test_strict_reports_failure_exit(self, prefs, project, mock_run, capsys):
        mock_run.return_value = MagicMock(returncode=1)
        assert main(["--path", str(project), "--numbers", "1,2", "--strict"]) == 1
        assert mock_run.call_count == 2
        assert "2 of 2 commands failed" in capsys.readouterr().out

    def test_strict_success(self, prefs, project, mock_run):
        assert main(["--path", str(project), "--numbers", "1", "--strict"]) == 0
