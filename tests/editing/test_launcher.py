"""Tests for the EditorLauncher and SubprocessRunner."""

import sys
from unittest.mock import MagicMock

import pytest

from flagshell.editing import launcher as launcher_mod
from flagshell.editing.launcher import EditorLauncher, SubprocessRunner
from flagshell.errors import EditorNotFoundError, EditorSpawnError, EditorWaitError


class TestResolve:
    def test_absolute_path(self):
        assert EditorLauncher.resolve(sys.executable) == [sys.executable]

    def test_extra_words_are_kept(self, monkeypatch):
        monkeypatch.setattr(launcher_mod.shutil, "which", lambda name: f"/usr/bin/{name}")
        assert EditorLauncher.resolve("code --wait") == ["/usr/bin/code", "--wait"]

    def test_not_on_path(self):
        with pytest.raises(EditorNotFoundError):
            EditorLauncher.resolve("definitely-not-an-editor-xyz")

    @pytest.mark.parametrize("editor", ["", "   ", "'unterminated"])
    def test_blank_or_malformed(self, editor):
        with pytest.raises(EditorNotFoundError):
            EditorLauncher.resolve(editor)


class TestLaunch:
    def test_appends_file_path(self):
        runner = MagicMock()
        runner.run.return_value = 0
        EditorLauncher(runner).launch(["/usr/bin/vi", "-n"], "/tmp/x.json")
        runner.run.assert_called_once_with(["/usr/bin/vi", "-n", "/tmp/x.json"])

    def test_nonzero_exit_is_not_an_error(self):
        runner = MagicMock()
        runner.run.return_value = 1
        EditorLauncher(runner).launch(["/usr/bin/vi"], "/tmp/x.json")

    def test_runner_errors_propagate(self):
        runner = MagicMock()
        runner.run.side_effect = EditorSpawnError("cannot start")
        with pytest.raises(EditorSpawnError):
            EditorLauncher(runner).launch(["/usr/bin/vi"], "/tmp/x.json")


class TestSubprocessRunner:
    def test_runs_to_completion(self):
        status = SubprocessRunner().run([sys.executable, "-c", "import sys; sys.exit(3)"])
        assert status == 3

    def test_spawn_failure(self, tmp_path):
        with pytest.raises(EditorSpawnError):
            SubprocessRunner().run([str(tmp_path / "no-such-program")])

    def test_wait_failure(self, monkeypatch):
        proc = MagicMock()
        proc.wait.side_effect = OSError("interrupted")
        monkeypatch.setattr(launcher_mod.subprocess, "Popen", lambda argv: proc)
        with pytest.raises(EditorWaitError):
            SubprocessRunner().run(["vi", "x"])

    def test_popen_is_attached_to_terminal(self, monkeypatch):
        calls = []

        def _popen(argv, **kwargs):
            calls.append(kwargs)
            proc = MagicMock()
            proc.wait.return_value = 0
            return proc

        monkeypatch.setattr(launcher_mod.subprocess, "Popen", _popen)
        SubprocessRunner().run(["vi", "x"])
        # No redirection: stdin/stdout/stderr are inherited
        assert calls == [{}]
