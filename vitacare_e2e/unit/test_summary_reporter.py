from pathlib import Path
from types import SimpleNamespace

from vitacare_e2e.ui_testing.framework.summary_reporter import (
    RunStats,
    SummaryReporter,
    build_summary_lines,
)


def report(when, outcome):
    return SimpleNamespace(
        when=when,
        passed=outcome == "passed",
        failed=outcome == "failed",
        skipped=outcome == "skipped",
    )


def test_outcomes_are_counted_per_phase(tmp_path):
    reporter = SummaryReporter(video_dir=tmp_path)

    reporter.pytest_runtest_logreport(report("call", "passed"))
    reporter.pytest_runtest_logreport(report("call", "passed"))
    reporter.pytest_runtest_logreport(report("call", "failed"))
    reporter.pytest_runtest_logreport(report("setup", "skipped"))
    reporter.pytest_runtest_logreport(report("setup", "passed"))
    reporter.pytest_runtest_logreport(report("teardown", "passed"))

    stats = reporter.stats
    assert (stats.passed, stats.failed, stats.skipped) == (2, 1, 1)
    assert stats.total == 4
    assert stats.success_rate == 50.0


def test_collects_recorded_videos(tmp_path):
    (tmp_path / "b.webm").write_bytes(b"")
    (tmp_path / "a.webm").write_bytes(b"")
    (tmp_path / "notes.txt").write_text("x", encoding="utf-8")

    videos = SummaryReporter(video_dir=tmp_path).collect_videos()

    assert [Path(v).name for v in videos] == ["a.webm", "b.webm"]


def test_missing_video_dir_yields_no_videos(tmp_path):
    assert SummaryReporter(video_dir=tmp_path / "absent").collect_videos() == []
    assert SummaryReporter().collect_videos() == []


def test_summary_lines():
    lines = build_summary_lines(RunStats(passed=3, failed=1, videos=["/tmp/run/one.webm"]), 12.345)

    assert "Total Duration: 12.35s" in lines
    assert "Success Rate: 75.0%" in lines
    assert "  Video 1: one.webm" in lines
    assert [line for line in lines if line.startswith(("Passed", "Failed", "Skipped"))] == [
        "Passed: 3",
        "Failed: 1",
        "Skipped: 0",
    ]
    assert not any(line.startswith("Flaky") for line in lines)


def test_summary_without_tests_or_videos():
    lines = build_summary_lines(RunStats(), 0.0)

    assert "Success Rate: 0.0%" in lines
    assert "No videos recorded" in lines
