"""
Tests for compiler.py.

Covers:
- compile_roadmap on the fixture roadmap in every sort mode
- Behaviour scenarios: rank seeding, missing done date, malformed IDs,
  depth ordering of in-progress work
- should_generate run-mode gate
- generate_todotxt: full rewrite, dry run, idempotence, I/O errors
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest

from roadmap_todotxt.compiler import CompileError, compile_roadmap, generate_todotxt, should_generate
from roadmap_todotxt.config import CompilerConfig, RunMode
from roadmap_todotxt.sorting.sorter import SortMode

FIXTURE = Path(__file__).parent / "fixtures" / "ROADMAP_TASKS.md"

FIXTURE_RWS_LINES = [
    "(A) @rework Rework header - src:+UI",
    "(B) @pending Write docs - src:+CoreAuth - due:2025-05-01",
    "(C) @paused Refactor session store - src:+CoreAuth_LoginFlow - ts:[Paused: SWS - 04.11.25_3:15 PM PDT]",
    "(D) @testing Test widgets - src:+UI",
    "(E) @inprogress Build login form - src:+CoreAuth_LoginFlow",
    "(F) @inprogress Wire database - src:+CoreAuth",
    "(G) @blocked Blocked on vendor - src:+CoreAuth_LoginFlow",
    "(H) @pendingtesting Await user testing - src:+UI",
    "x @completed Set up repo - src:+CoreAuth - done:2025-04-10 - ts:04.10.25_10:00 AM PDT",
]


@pytest.fixture
def roadmap_text():
    return FIXTURE.read_text(encoding="utf-8")


@pytest.fixture
def config(tmp_path, roadmap_text):
    roadmap = tmp_path / "ROADMAP_TASKS.md"
    roadmap.write_text(roadmap_text, encoding="utf-8")
    return CompilerConfig(roadmap_path=roadmap, output_path=tmp_path / "todotasks.txt")


# ---------------------------------------------------------------------------
# compile_roadmap
# ---------------------------------------------------------------------------

class TestCompileFixture:
    def test_rws(self, roadmap_text):
        result = compile_roadmap(roadmap_text, line_ending="\n")
        assert result.lines == FIXTURE_RWS_LINES
        assert result.text == "\n".join(FIXTURE_RWS_LINES)
        assert len(result.diagnostics) == 1

    def test_status_mode_has_no_priorities(self, roadmap_text):
        result = compile_roadmap(roadmap_text, SortMode.STATUS)
        assert [t.id for t in result.tasks] == [
            "AUTH-2", "WEB-1", "CORE-2", "AUTH-1", "WEB-3",
            "CORE-3", "AUTH-3", "WEB-2", "CORE-1",
        ]
        assert not any(line.startswith("(") for line in result.lines)

    def test_alpha_mode(self, roadmap_text):
        result = compile_roadmap(roadmap_text, SortMode.ALPHA)
        assert [t.description for t in result.tasks] == [
            "Await user testing",
            "Blocked on vendor",
            "Build login form",
            "Refactor session store",
            "Rework header",
            "Test widgets",
            "Wire database",
            "Write docs",
            "Set up repo",
        ]
        assert not any(line.startswith("(") for line in result.lines)

    def test_source_mode(self, roadmap_text):
        result = compile_roadmap(roadmap_text, SortMode.SOURCE)
        assert [t.id for t in result.tasks] == [
            "CORE-3", "CORE-2",
            "AUTH-2", "AUTH-1", "AUTH-3",
            "WEB-3", "WEB-1", "WEB-2",
            "CORE-1",
        ]
        assert not any(line.startswith("(") for line in result.lines)

    def test_empty_roadmap(self):
        result = compile_roadmap("", line_ending="\n")
        assert result.lines == []
        assert result.text == ""


class TestScenarios:
    def test_rank_seeds_automatic_letters(self):
        content = "\n".join([
            "## Work",
            "- ⏳ [ WORK-1 ] First • [ rnk:B ]",
            "- ⏳ [ WORK-2 ] Second",
        ])
        assert compile_roadmap(content).lines == [
            "(B) @pending First - src:+Work",
            "(C) @pending Second - src:+Work",
        ]

    def test_completed_without_done_date(self):
        result = compile_roadmap("- ✅ [ WORK-1 ] Shipped")
        assert result.lines == ["x @completed Shipped"]
        assert len(result.diagnostics) == 1

    def test_malformed_id_dropped(self):
        result = compile_roadmap("- ⏳ [TASK-1] Hidden\n- ⏳ [ WORK-2 ] Shown", line_ending="\n")
        assert result.lines == ["(A) @pending Shown"]
        assert "Hidden" not in result.text
        assert len(result.diagnostics) == 1

    def test_deeper_in_progress_first(self):
        content = "\n".join([
            "## Core",
            "- 🔄 [ CORE-1 ] Shallow",
            "### Auth",
            "- 🔄 [ CORE-2 ] Deep",
        ])
        assert [t.id for t in compile_roadmap(content).tasks] == ["CORE-2", "CORE-1"]


# ---------------------------------------------------------------------------
# Run-mode gate
# ---------------------------------------------------------------------------

class TestShouldGenerate:
    @pytest.mark.parametrize("mode", [RunMode.GIT, RunMode.WATCHER])
    def test_automatic_modes_always_run(self, mode):
        assert should_generate(mode, [])
        assert should_generate(mode, ["generate"])

    def test_manual_requires_arguments(self):
        assert not should_generate(RunMode.MANUAL, [])
        assert should_generate(RunMode.MANUAL, ["generate"])


# ---------------------------------------------------------------------------
# generate_todotxt
# ---------------------------------------------------------------------------

class TestGenerateTodotxt:
    def test_writes_output(self, config):
        result = generate_todotxt(config)
        written = config.output_path.read_bytes().decode("utf-8")
        assert written == result.text
        assert result.lines == FIXTURE_RWS_LINES

    def test_replaces_previous_content(self, config):
        config.output_path.write_text("stale line\n" * 50, encoding="utf-8")
        generate_todotxt(config)
        assert "stale line" not in config.output_path.read_text(encoding="utf-8")

    def test_idempotent(self, config):
        generate_todotxt(config)
        first = config.output_path.read_bytes()
        generate_todotxt(config)
        assert config.output_path.read_bytes() == first

    def test_no_trailing_line_ending(self, config):
        generate_todotxt(config)
        assert not config.output_path.read_bytes().endswith(b"\n")

    def test_dry_run_writes_nothing(self, config):
        result = generate_todotxt(config, dry_run=True)
        assert result.lines == FIXTURE_RWS_LINES
        assert not config.output_path.exists()

    def test_manual_mode_skips_without_arguments(self, config):
        config = config.model_copy(update={"run_mode": RunMode.MANUAL})
        assert generate_todotxt(config) is None
        assert not config.output_path.exists()

    def test_manual_mode_runs_with_arguments(self, config):
        config = config.model_copy(update={"run_mode": RunMode.MANUAL})
        assert generate_todotxt(config, ["generate"]) is not None
        assert config.output_path.exists()

    def test_missing_roadmap(self, tmp_path):
        config = CompilerConfig(
            roadmap_path=tmp_path / "missing.md",
            output_path=tmp_path / "todotasks.txt",
        )
        with pytest.raises(CompileError, match="Cannot read roadmap"):
            generate_todotxt(config)
        assert not config.output_path.exists()

    def test_invalid_utf8(self, tmp_path):
        roadmap = tmp_path / "ROADMAP_TASKS.md"
        roadmap.write_bytes(b"- \xff\xfe broken")
        config = CompilerConfig(roadmap_path=roadmap, output_path=tmp_path / "out.txt")
        with pytest.raises(CompileError):
            generate_todotxt(config)

    def test_unwritable_output(self, config, tmp_path):
        config = config.model_copy(update={"output_path": tmp_path / "no-such-dir" / "out.txt"})
        with pytest.raises(CompileError, match="Cannot write"):
            generate_todotxt(config)
