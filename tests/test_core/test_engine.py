"""Tests for dsinit.core.engine module."""

import os
from pathlib import Path

import pytest

from dsinit.core.engine import (
    BACKUP_MARKER,
    apply,
    atomic_write,
    backup_path_for,
    render,
    resolve_entry_path,
)
from dsinit.core.entry import (
    Action,
    Decision,
    ProjectContext,
    WritePolicy,
    directory,
    file,
)
from dsinit.core.errors import PathEscapeError, ScaffoldError, WriteFailureError


def _accept(path):
    return Decision.ACCEPT


def _decline(path):
    return Decision.DECLINE


class TestRender:
    """Tests for render()."""

    def test_substitutes_name(self, context):
        out = render("project: {{name}}", context)
        assert out == "project: demo"
        assert "{{" not in out

    def test_whitespace_inside_braces(self, context):
        assert render("{{ name }}-{{python_version}}", context) == "demo-3.11"

    def test_unknown_placeholder_left_verbatim(self, context):
        assert render("{{name}} {{nope}}", context) == "demo {{nope}}"

    def test_dotted_expressions_untouched(self, context):
        text = "runs-on: ${{ matrix.os }}"
        assert render(text, context) == text

    def test_derived_values(self, context):
        out = render("{{package}} {{year}} {{date}}", context)
        assert out == "demo 2024 2024-05-17"

    def test_missing_repo_url_renders_empty(self, context):
        assert render("[{{repo_url}}]", context) == "[]"

    def test_package_from_dashed_name(self):
        ctx = ProjectContext(name="My-Project")
        assert render("{{package}}", ctx) == "my_project"


class TestResolveEntryPath:
    """Tests for resolve_entry_path()."""

    def test_relative_path_inside_root(self, project_root):
        base = project_root.resolve()
        assert resolve_entry_path(base, "src/a.py") == base / "src" / "a.py"

    def test_parent_segments_that_stay_inside(self, project_root):
        base = project_root.resolve()
        assert resolve_entry_path(base, "src/../README.md") == base / "README.md"

    def test_escape_rejected(self, project_root):
        with pytest.raises(PathEscapeError):
            resolve_entry_path(project_root.resolve(), "../outside.txt")

    def test_absolute_rejected(self, project_root):
        with pytest.raises(PathEscapeError):
            resolve_entry_path(project_root.resolve(), "/etc/passwd")

    def test_symlink_out_of_root_rejected(self, tmp_path, project_root):
        outside = tmp_path / "outside"
        outside.mkdir()
        (project_root / "link").symlink_to(outside, target_is_directory=True)
        with pytest.raises(PathEscapeError):
            resolve_entry_path(project_root.resolve(), "link/file.txt")


class TestApplyBasics:
    """Directory and CreateIfAbsent behavior."""

    def test_end_to_end_scenario(self, tmp_path, context):
        root = tmp_path / "demo"
        entries = [directory("src"), file("src/__init__.py", "")]

        result = apply(root, entries, context)

        assert result.created == 2
        assert (root / "src" / "__init__.py").exists()
        assert (root / "src" / "__init__.py").read_bytes() == b""

    def test_idempotent_second_run(self, project_root, context):
        entries = [
            directory("data/raw"),
            file("data/raw/.gitkeep"),
            file("README.md", "# {{name}}\n"),
        ]

        first = apply(project_root, entries, context)
        second = apply(project_root, entries, context)

        assert first.created == 3
        assert second.created == 0
        assert second.skipped == 3

    def test_existing_directory_is_not_an_error(self, project_root, context):
        (project_root / "notebooks").mkdir()
        result = apply(project_root, [directory("notebooks")], context)
        assert result.skipped == 1
        assert result.outcomes[0].action == Action.SKIPPED

    def test_create_if_absent_leaves_existing_file(self, project_root, context):
        target = project_root / "README.md"
        target.write_text("mine")

        result = apply(project_root, [file("README.md", "generated")], context)

        assert target.read_text() == "mine"
        assert result.skipped == 1
        assert result.touched == []

    def test_rendered_content_written(self, project_root, context):
        apply(project_root, [file("NAME.txt", "{{name}}:{{python_version}}")], context)
        assert (project_root / "NAME.txt").read_text() == "demo:3.11"

    def test_content_written_verbatim(self, project_root, context):
        apply(project_root, [file("crlf.txt", "a\r\nb\n")], context)
        assert (project_root / "crlf.txt").read_bytes() == b"a\r\nb\n"

    def test_creates_missing_root(self, tmp_path, context):
        root = tmp_path / "nested" / "new"
        apply(root, [file("x.txt", "x")], context)
        assert (root / "x.txt").read_text() == "x"

    def test_touched_lists_created_paths(self, project_root, context):
        result = apply(project_root, [directory("src"), file("src/a.py", "")], context)
        assert result.touched == ["src", "src/a.py"]

    def test_reporter_receives_every_outcome(self, project_root, context):
        seen = []
        entries = [directory("src"), file("src/a.py", "")]

        apply(project_root, entries, context, reporter=seen.append)

        assert [o.path for o in seen] == ["src", "src/a.py"]
        assert all(o.action == Action.CREATED for o in seen)


class TestApplyOverwrite:
    """AlwaysOverwrite and PromptBeforeOverwrite behavior."""

    def test_always_overwrite(self, project_root, context):
        target = project_root / "ci.yml"
        target.write_text("old")

        result = apply(
            project_root, [file("ci.yml", "new {{name}}", WritePolicy.ALWAYS_OVERWRITE)], context
        )

        assert target.read_text() == "new demo"
        assert result.overwritten == 1
        assert result.backed_up == 0
        assert result.touched == ["ci.yml"]

    def test_prompt_non_interactive_is_decline(self, project_root, context):
        target = project_root / "README.md"
        target.write_bytes(b"original \x00 bytes")
        calls = []

        def decide(path):
            calls.append(path)
            return Decision.ACCEPT

        result = apply(
            project_root,
            [file("README.md", "new", WritePolicy.PROMPT_BEFORE_OVERWRITE)],
            context,
            interactive=False,
            decide=decide,
        )

        assert target.read_bytes() == b"original \x00 bytes"
        assert result.skipped == 1
        assert calls == []

    def test_prompt_interactive_without_decide_is_decline(self, project_root, context):
        target = project_root / "README.md"
        target.write_text("keep")

        result = apply(
            project_root,
            [file("README.md", "new", WritePolicy.PROMPT_BEFORE_OVERWRITE)],
            context,
            interactive=True,
        )

        assert target.read_text() == "keep"
        assert result.skipped == 1

    def test_prompt_declined(self, project_root, context):
        target = project_root / "README.md"
        target.write_text("keep")

        result = apply(
            project_root,
            [file("README.md", "new", WritePolicy.PROMPT_BEFORE_OVERWRITE)],
            context,
            interactive=True,
            decide=_decline,
        )

        assert target.read_text() == "keep"
        assert result.skipped == 1
        assert result.backed_up == 0
        assert not list(project_root.glob(f"README.md{BACKUP_MARKER}*"))

    def test_prompt_accepted_makes_backup(self, project_root, context):
        target = project_root / "README.md"
        target.write_text("original content")

        result = apply(
            project_root,
            [file("README.md", "# {{name}}", WritePolicy.PROMPT_BEFORE_OVERWRITE)],
            context,
            interactive=True,
            decide=_accept,
        )

        backups = list(project_root.glob(f"README.md{BACKUP_MARKER}*"))
        assert len(backups) == 1
        assert backups[0].read_text() == "original content"
        assert target.read_text() == "# demo"
        assert result.overwritten == 1
        assert result.backed_up == 1
        assert result.backups[0].backup == backups[0]
        assert result.outcomes[0].backup == backups[0]

    def test_decide_receives_target_path(self, project_root, context):
        (project_root / "README.md").write_text("x")
        seen = []

        def decide(path):
            seen.append(path)
            return Decision.DECLINE

        apply(
            project_root,
            [file("README.md", "y", WritePolicy.PROMPT_BEFORE_OVERWRITE)],
            context,
            interactive=True,
            decide=decide,
        )

        assert seen == [project_root.resolve() / "README.md"]

    def test_prompt_on_missing_file_creates_without_asking(self, project_root, context):
        def decide(path):
            raise AssertionError("should not be asked")

        result = apply(
            project_root,
            [file("README.md", "y", WritePolicy.PROMPT_BEFORE_OVERWRITE)],
            context,
            interactive=True,
            decide=decide,
        )
        assert result.created == 1

    def test_repeated_backups_do_not_collide(self, project_root, context):
        target = project_root / "README.md"
        entry = file("README.md", "v{{year}}", WritePolicy.PROMPT_BEFORE_OVERWRITE)

        target.write_text("one")
        apply(project_root, [entry], context, interactive=True, decide=_accept)
        target.write_text("two")
        apply(project_root, [entry], context, interactive=True, decide=_accept)

        contents = sorted(p.read_text() for p in project_root.glob(f"README.md{BACKUP_MARKER}*"))
        assert contents == ["one", "two"]


class TestApplyFailures:
    """Fail-fast behavior."""

    def test_path_escape_aborts_run(self, tmp_path, project_root, context):
        entries = [
            file("first.txt", "1"),
            file("../escaped.txt", "x"),
            file("later.txt", "2"),
        ]

        with pytest.raises(PathEscapeError) as exc_info:
            apply(project_root, entries, context)

        assert not (tmp_path / "escaped.txt").exists()
        assert not (project_root / "later.txt").exists()
        assert (project_root / "first.txt").exists()
        assert exc_info.value.path == "../escaped.txt"
        assert exc_info.value.result.created == 1

    def test_missing_parent_directory_is_write_failure(self, project_root, context):
        with pytest.raises(WriteFailureError) as exc_info:
            apply(project_root, [file("src/a.py", "")], context)

        err = exc_info.value
        assert err.path == "src/a.py"
        assert err.policy == WritePolicy.CREATE_IF_ABSENT
        assert isinstance(err.__cause__, OSError)

    def test_failure_keeps_earlier_entries(self, project_root, context):
        entries = [directory("ok"), file("ok/a.txt", "a"), file("missing/b.txt", "b")]

        with pytest.raises(ScaffoldError) as exc_info:
            apply(project_root, entries, context)

        assert (project_root / "ok" / "a.txt").read_text() == "a"
        assert exc_info.value.result.created == 2
        assert "missing/b.txt" in exc_info.value.describe()

    def test_directory_over_existing_file_fails(self, project_root, context):
        (project_root / "data").write_text("not a dir")
        with pytest.raises(WriteFailureError):
            apply(project_root, [directory("data")], context)

    @pytest.mark.skipif(os.name == "nt" or os.geteuid() == 0, reason="needs POSIX permissions")
    def test_read_only_directory(self, project_root, context):
        locked = project_root / "locked"
        locked.mkdir()
        locked.chmod(0o500)
        try:
            with pytest.raises(WriteFailureError):
                apply(project_root, [file("locked/a.txt", "a")], context)
            assert list(locked.iterdir()) == []
        finally:
            locked.chmod(0o700)


class TestAtomicWrite:
    """Tests for atomic_write() and backup naming."""

    def test_failed_write_keeps_old_content(self, tmp_path, monkeypatch):
        target = tmp_path / "f.txt"
        target.write_text("old")

        def boom(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr(os, "replace", boom)
        with pytest.raises(OSError):
            atomic_write(target, "new")

        assert target.read_text() == "old"
        assert [p.name for p in tmp_path.iterdir()] == ["f.txt"]

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    def test_keeps_mode_of_replaced_file(self, tmp_path):
        target = tmp_path / "run.sh"
        target.write_text("#!/bin/sh\n")
        target.chmod(0o755)

        atomic_write(target, "#!/bin/sh\necho hi\n")

        assert target.stat().st_mode & 0o777 == 0o755

    def test_backup_name_format(self, tmp_path):
        from datetime import datetime

        path = backup_path_for(tmp_path / "README.md", datetime(2024, 1, 2, 3, 4, 5))
        assert path.name == "README.md.bak.20240102T030405"

    def test_backup_name_collision(self, tmp_path):
        from datetime import datetime

        when = datetime(2024, 1, 2, 3, 4, 5)
        (tmp_path / "README.md.bak.20240102T030405").write_text("x")
        path = backup_path_for(tmp_path / "README.md", when)
        assert path.name == "README.md.bak.20240102T030405.1"
