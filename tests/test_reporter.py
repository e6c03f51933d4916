"""
Tests for Reporter: transcript content, sink selection and release.
"""
import io
import os
import sys

import pytest

from dupsweep.core import Reporter, ActionMode, Action, select_retention
from dupsweep.core.reporter import printable
from dupsweep.core.models import ActionOutcome, RunSummary


def outcomes_for(decision, failed=()):
    result = []
    for i, member in enumerate(decision.group.members):
        if i == decision.keep_index:
            result.append(ActionOutcome(member.path, Action.KEPT))
        elif member.path in failed:
            result.append(ActionOutcome(member.path, Action.REMOVE_FAILED, "Permission denied"))
        else:
            result.append(ActionOutcome(member.path, Action.REMOVED))
    return result


class TestTranscript:

    def test_verbose_group_block(self, group_factory):
        decision = select_retention(group_factory((1, "/a"), (2, "/b")), "first")
        console = io.StringIO()

        with Reporter(verbose=True, console=console) as reporter:
            reporter.report_group(decision, outcomes_for(decision), ActionMode.DELETE)
            assert "Duplicate group (Hash: h):" in reporter.transcript
            assert "  [KEEP] /a" in reporter.transcript
            assert "  [DEL] /b" in reporter.transcript

        assert "[KEEP] /a" in console.getvalue()

    def test_non_verbose_is_silent(self, group_factory):
        decision = select_retention(group_factory((1, "/a"), (2, "/b")), "first")
        console = io.StringIO()

        with Reporter(verbose=False, console=console) as reporter:
            reporter.report_group(decision, outcomes_for(decision), ActionMode.REPORT_ONLY)
            reporter.finalize(RunSummary(groups_processed=1))

        assert console.getvalue() == ""

    def test_dry_run_previews_always_printed(self, group_factory):
        decision = select_retention(group_factory((1, "/a"), (2, "/b")), "newest")
        outcomes = [ActionOutcome("/a", Action.WOULD_REMOVE), ActionOutcome("/b", Action.KEPT)]
        console = io.StringIO()

        with Reporter(verbose=False, console=console) as reporter:
            reporter.report_group(decision, outcomes, ActionMode.DRY_RUN)

        assert console.getvalue() == 'Would remove: "/a"\n'

    def test_would_remove_marker_differs_from_removed(self, group_factory):
        decision = select_retention(group_factory((1, "/a"), (2, "/b")), "first")
        outcomes = [ActionOutcome("/a", Action.KEPT), ActionOutcome("/b", Action.WOULD_REMOVE)]

        with Reporter(verbose=True, console=io.StringIO()) as reporter:
            reporter.report_group(decision, outcomes, ActionMode.REPORT_ONLY)
            assert "  [WOULD DEL] /b" in reporter.transcript
            assert "  [DEL] /b" not in reporter.transcript

    def test_failures_always_recorded(self, group_factory):
        decision = select_retention(group_factory((1, "/a"), (2, "/b")), "first")

        with Reporter(verbose=False, console=io.StringIO()) as reporter:
            reporter.report_group(decision, outcomes_for(decision, failed={"/b"}), ActionMode.DELETE)
            assert 'Error: Failed to remove "/b": Permission denied' in reporter.transcript


class TestFinalize:

    def test_returns_exit_status(self):
        with Reporter(console=io.StringIO()) as reporter:
            assert reporter.finalize(RunSummary(groups_processed=3)) == 0
        with Reporter(console=io.StringIO()) as reporter:
            assert reporter.finalize(RunSummary(groups_processed=3, failures=2)) == 1

    def test_warns_on_stderr_when_not_verbose(self, capsys):
        with Reporter(verbose=False, console=io.StringIO()) as reporter:
            reporter.finalize(RunSummary(failures=2))

        assert "2 file(s) could not be removed" in capsys.readouterr().err


class TestSink:

    def test_log_file_receives_transcript(self, tmp_path, group_factory):
        log_file = tmp_path / "run.log"
        decision = select_retention(group_factory((1, "/a"), (2, "/b")), "last")
        console = io.StringIO()

        with Reporter(verbose=True, console=console, log_file=str(log_file)) as reporter:
            reporter.report_group(decision, outcomes_for(decision), ActionMode.DELETE)
            reporter.finalize(RunSummary(groups_processed=1, removed=1))

        content = log_file.read_text(encoding="utf-8")
        assert "[KEEP] /b" in content
        assert "Duplicate groups processed: 1" in content
        assert "[KEEP]" not in console.getvalue()
        assert f"Detailed log available at: {log_file}" in console.getvalue()

    def test_log_file_closed_and_buffer_released_on_error(self, tmp_path):
        log_file = tmp_path / "run.log"
        reporter = Reporter(verbose=False, console=io.StringIO(), log_file=str(log_file))

        try:
            with reporter:
                reporter.lines.append("partial")
                raise RuntimeError("boom")
        except RuntimeError:
            pass

        assert reporter.lines == []
        assert log_file.read_text(encoding="utf-8") == "partial\n"


@pytest.mark.skipif(sys.platform != "linux", reason="Needs a filesystem that accepts arbitrary name bytes")
class TestUndecodableNames:

    NAME = os.fsdecode(b"/data/a\xff")

    def test_printable_escapes_undecodable_bytes(self):
        assert printable(self.NAME) == "/data/a\\xff"
        assert printable("/data/plain.txt") == "/data/plain.txt"

    def test_dry_run_preview_on_strict_console(self, group_factory):
        decision = select_retention(group_factory((1, self.NAME), (2, "/data/b")), "last")
        outcomes = [ActionOutcome(self.NAME, Action.WOULD_REMOVE), ActionOutcome("/data/b", Action.KEPT)]
        raw = io.BytesIO()
        console = io.TextIOWrapper(raw, encoding="utf-8")

        with Reporter(verbose=False, console=console) as reporter:
            reporter.report_group(decision, outcomes, ActionMode.DRY_RUN)
        console.flush()

        assert raw.getvalue() == b'Would remove: "/data/a\\xff"\n'

    def test_log_file_accepts_undecodable_paths(self, tmp_path, group_factory):
        log_file = tmp_path / "run.log"
        decision = select_retention(group_factory((1, "/data/b"), (2, self.NAME)), "first")
        outcomes = [
            ActionOutcome("/data/b", Action.KEPT),
            ActionOutcome(self.NAME, Action.REMOVE_FAILED, f"[Errno 13] Permission denied: '{self.NAME}'"),
        ]

        with Reporter(verbose=True, console=io.StringIO(), log_file=str(log_file)) as reporter:
            reporter.report_group(decision, outcomes, ActionMode.DELETE)
            reporter.finalize(RunSummary(groups_processed=1, failures=1))

        content = log_file.read_text(encoding="utf-8")
        assert "[FAILED] /data/a\\xff" in content
        assert "Failed to remove \"/data/a\\xff\"" in content
        assert "Failed removals: 1" in content
