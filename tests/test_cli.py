"""Tests for CLI interface"""

from __future__ import annotations

import pytest

from sourcemap import __version__
from sourcemap.cli import main


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """A project, a profile directory, and a cwd without a ./config folder."""
    project = tmp_path / "project"
    project.mkdir()
    (project / "main.c").write_text("int main(void) { return 0; }\n", encoding="utf-8")
    (project / "notes.txt").write_text("skip me\n", encoding="utf-8")

    config = tmp_path / "profiles"
    config.mkdir()
    (config / "tiny.ini").write_text(
        "[Core]\nlanguage_name = Tiny\n[Filters]\nallowed_extensions = c\n",
        encoding="utf-8",
    )

    monkeypatch.chdir(tmp_path)
    return project, config


class TestMain:
    """Tests for main"""

    def test_generates_document(self, workspace, capsys):
        project, config = workspace
        out = project / "map.md"

        main(["tiny", str(project), str(out), "--config-dir", str(config)])

        text = out.read_text(encoding="utf-8")
        assert text.startswith("# Tiny\n")
        assert "### main.c" in text
        assert "### notes.txt" not in text
        assert f"Export complete: {out}" in capsys.readouterr().out

    def test_uses_bundled_profile(self, workspace):
        project, _ = workspace
        out = project / "map.md"

        main(["c", str(project), str(out)])

        assert "### main.c" in out.read_text(encoding="utf-8")

    def test_default_output_name(self, workspace, tmp_path):
        project, config = workspace

        main(["tiny", str(project), "--config-dir", str(config)])

        assert (tmp_path / "output.md").exists()

    def test_unknown_profile_exits_with_error(self, workspace, capsys):
        project, _ = workspace

        with pytest.raises(SystemExit) as exc_info:
            main(["cobol", str(project)])

        assert exc_info.value.code == 1
        assert "Could not load language profile 'cobol'" in capsys.readouterr().err

    def test_bad_root_exits_with_error(self, workspace, tmp_path, capsys):
        _, config = workspace

        with pytest.raises(SystemExit) as exc_info:
            main(["tiny", str(tmp_path / "missing"), "--config-dir", str(config)])

        assert exc_info.value.code == 1
        assert "does not exist" in capsys.readouterr().err

    def test_language_is_required(self, workspace):
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 2

    def test_list_profiles(self, workspace, capsys):
        _, config = workspace

        main(["--list-profiles", "--config-dir", str(config)])

        names = capsys.readouterr().out.split()
        assert "tiny" in names
        assert "c" in names
        assert "python" in names

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out
