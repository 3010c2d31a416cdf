"""Parse profiling for Strict XML Parser.

Measures wall time and resident set size around individual parses and
summarizes them per run. Memory figures come from :mod:`psutil`.
"""

import json
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

import psutil

from strict_xml_parser.api.parser import InputType, try_parse
from strict_xml_parser.shared.logging import get_logger
from strict_xml_parser.shared.result import ParseResult

MS_PER_SECOND = 1000


@dataclass
class ParseProfile:
    """Measurements for one profiled source."""

    label: str
    characters: int
    started: float
    finished: float = 0.0
    rss_before: int = 0  # bytes
    rss_after: int = 0  # bytes
    element_count: Optional[int] = None
    error_kind: Optional[str] = None

    @property
    def elapsed_ms(self) -> float:
        return (self.finished - self.started) * MS_PER_SECOND

    @property
    def rss_delta(self) -> int:
        return self.rss_after - self.rss_before

    @property
    def accepted(self) -> bool:
        return self.error_kind is None

    @property
    def characters_per_second(self) -> float:
        """Input characters consumed per second of wall time."""
        elapsed_s = self.finished - self.started
        return self.characters / elapsed_s if elapsed_s > 0 else 0.0

    def record(self, result: ParseResult) -> None:
        """Copy the outcome of a parse into this profile."""
        if result.success:
            self.element_count = len(result.document.iter_elements())
        else:
            self.error_kind = result.error.kind.value

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "characters": self.characters,
            "elapsed_ms": self.elapsed_ms,
            "rss_delta": self.rss_delta,
            "characters_per_second": self.characters_per_second,
            "element_count": self.element_count,
            "error_kind": self.error_kind,
        }


@dataclass
class ProfileReport:
    """Totals over the profiles gathered by a :class:`ParseProfiler`."""

    profiles: List[ParseProfile] = field(default_factory=list)
    created: float = field(default_factory=time.time)

    @property
    def total_characters(self) -> int:
        return sum(p.characters for p in self.profiles)

    @property
    def total_elapsed_ms(self) -> float:
        return sum(p.elapsed_ms for p in self.profiles)

    @property
    def rejected_count(self) -> int:
        return sum(1 for p in self.profiles if not p.accepted)

    @property
    def characters_per_second(self) -> float:
        """Overall throughput, weighted by input size."""
        if self.total_elapsed_ms <= 0:
            return 0.0
        return self.total_characters / (self.total_elapsed_ms / MS_PER_SECOND)

    def slowest(self) -> Optional[ParseProfile]:
        return max(self.profiles, key=lambda p: p.elapsed_ms, default=None)

    def to_dict(self) -> Dict[str, Any]:
        slowest = self.slowest()
        return {
            "created": self.created,
            "totals": {
                "sources": len(self.profiles),
                "rejected": self.rejected_count,
                "characters": self.total_characters,
                "elapsed_ms": self.total_elapsed_ms,
                "characters_per_second": self.characters_per_second,
                "slowest": slowest.label if slowest else None,
            },
            "profiles": [p.to_dict() for p in self.profiles],
        }


class ParseProfiler:
    """Collects a :class:`ParseProfile` for every source it is given.

    Examples:
        >>> profiler = ParseProfiler()
        >>> result = profiler.run("sample", '<?xml version="1.0"?><a/>')
        >>> profiler.report().profiles[0].element_count
        1
    """

    def __init__(self, track_memory: bool = True):
        """Initialize the profiler.

        Args:
            track_memory: Sample the process RSS before and after each parse
        """
        self.profiles: List[ParseProfile] = []
        self.logger = get_logger(__name__, None, "parse_profiler")
        self._process = psutil.Process() if track_memory else None

    @property
    def track_memory(self) -> bool:
        return self._process is not None

    def _rss(self) -> int:
        return self._process.memory_info().rss if self._process else 0

    @contextmanager
    def measure(self, label: str, characters: int = 0) -> Iterator[ParseProfile]:
        """Time the enclosed block and keep its profile, even if it raises."""
        profile = ParseProfile(
            label=label,
            characters=characters,
            started=time.perf_counter(),
            rss_before=self._rss(),
        )
        try:
            yield profile
        finally:
            profile.finished = time.perf_counter()
            profile.rss_after = self._rss()
            self.profiles.append(profile)
            self.logger.debug(
                "Profiled source",
                extra={
                    "label": label,
                    "elapsed_ms": profile.elapsed_ms,
                    "rss_delta": profile.rss_delta,
                }
            )

    def run(self, label: str, input_data: InputType) -> ParseResult:
        """Parse ``input_data`` under :meth:`measure` and record the outcome."""
        with self.measure(label, len(input_data)) as profile:
            result = try_parse(input_data)
        profile.record(result)
        return result

    def report(self) -> ProfileReport:
        return ProfileReport(profiles=list(self.profiles))

    def save_report(self, output_path: Path, report: Optional[ProfileReport] = None) -> None:
        """Write ``report`` (a fresh one by default) to ``output_path`` as JSON."""
        report = report or self.report()
        output_path.write_text(json.dumps(report.to_dict(), indent=2), encoding="utf-8")
        self.logger.info(
            "Saved profile report",
            extra={"output_path": str(output_path), "sources": len(report.profiles)}
        )

    def reset(self) -> None:
        self.profiles.clear()
