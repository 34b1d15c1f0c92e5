"""
================================================================================
Summary Reporter
================================================================================

pytest plugin printing an end-of-run summary: duration, pass/fail/skip
counts, success rate and the videos recorded for the session.

Registered from the root conftest:
    config.pluginmanager.register(SummaryReporter(video_dir), "vitacare-summary")

================================================================================
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import pytest
from loguru import logger


@dataclass
class RunStats:
    passed: int = 0
    failed: int = 0
    skipped: int = 0
    videos: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.passed + self.failed + self.skipped

    @property
    def success_rate(self) -> float:
        return (self.passed / self.total * 100) if self.total else 0.0


def build_summary_lines(stats: RunStats, duration: float) -> List[str]:
    """Render the summary block."""
    lines = [
        "=" * 60,
        "VitaCare Test Execution Summary",
        "=" * 60,
        f"Total Duration: {duration:.2f}s",
        f"Passed: {stats.passed}",
        f"Failed: {stats.failed}",
        f"Skipped: {stats.skipped}",
        f"Success Rate: {stats.success_rate:.1f}%",
    ]
    if stats.videos:
        lines.append("Videos Generated:")
        lines.extend(f"  Video {i}: {Path(v).name}" for i, v in enumerate(stats.videos, start=1))
    else:
        lines.append("No videos recorded")
    lines.append("=" * 60)
    return lines


class SummaryReporter:
    """Collects per-test outcomes and logs a summary at session end."""

    def __init__(self, video_dir: Optional[Path] = None):
        self.video_dir = Path(video_dir) if video_dir else None
        self.stats = RunStats()
        self._start = time.monotonic()

    @pytest.hookimpl
    def pytest_sessionstart(self, session) -> None:
        self._start = time.monotonic()
        logger.info("VitaCare test suite starting")

    @pytest.hookimpl
    def pytest_runtest_logreport(self, report) -> None:
        if report.when == "call":
            if report.passed:
                self.stats.passed += 1
            elif report.failed:
                self.stats.failed += 1
            elif report.skipped:
                self.stats.skipped += 1
        elif report.when == "setup":
            if report.skipped:
                self.stats.skipped += 1
            elif report.failed:
                self.stats.failed += 1

    def collect_videos(self) -> List[str]:
        if self.video_dir is None or not self.video_dir.exists():
            return []
        return sorted(str(p) for p in self.video_dir.glob("*.webm"))

    @pytest.hookimpl
    def pytest_sessionfinish(self, session, exitstatus) -> None:
        self.stats.videos = self.collect_videos()
        for line in build_summary_lines(self.stats, time.monotonic() - self._start):
            logger.info(line)


__all__ = [
    "RunStats",
    "SummaryReporter",
    "build_summary_lines",
]
