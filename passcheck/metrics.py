import json
import logging
import time
from collections import Counter
from datetime import datetime
from pathlib import Path

import psutil

from .report import EvaluationReport, StrengthLevel

logger = logging.getLogger(__name__)


class EvaluationMetrics:
    """Aggregates a batch of evaluations. Passwords themselves are never kept."""

    def __init__(self, run_name):
        self.run_name = run_name
        self.start_time = None
        self.end_time = None
        self.evaluations = 0
        self.scores = []
        self.latencies = []
        self.levels = Counter()
        self.breached = 0
        self.breach_unknown = 0
        self.cpu_samples = []
        self.memory_samples = []
        self.process = psutil.Process()

    def start(self):
        self.start_time = time.time()
        self.evaluations = 0
        self.scores = []
        self.latencies = []
        self.levels = Counter()
        self.breached = 0
        self.breach_unknown = 0

    def record(self, report: EvaluationReport, latency_ms):
        self.evaluations += 1
        self.scores.append(report.score)
        self.latencies.append(latency_ms)
        self.levels[report.level.value] += 1

        if report.pwned or report.pwned_offline:
            self.breached += 1
        elif report.pwned is None:
            self.breach_unknown += 1

    def sample_resources(self):
        try:
            self.cpu_samples.append(self.process.cpu_percent())
            self.memory_samples.append(
                self.process.memory_info().rss / 1024 / 1024
            )  # MB
        except psutil.Error as e:
            logger.debug("Resource sampling failed: %s", e)

    def stop(self):
        self.end_time = time.time()

    def get_report(self):
        total_time = self.end_time - self.start_time if self.end_time else 0

        return {
            "run": self.run_name,
            "timestamp": datetime.now().isoformat(),
            "total_evaluations": self.evaluations,
            "total_time_seconds": round(total_time, 2),
            "evaluations_per_second": (
                round(self.evaluations / total_time, 2) if total_time > 0 else 0
            ),
            "avg_score": (
                round(sum(self.scores) / len(self.scores), 2) if self.scores else 0
            ),
            "min_score": min(self.scores) if self.scores else 0,
            "max_score": max(self.scores) if self.scores else 0,
            "levels": {
                level.value: self.levels.get(level.value, 0) for level in StrengthLevel
            },
            "breached": self.breached,
            "breach_unknown": self.breach_unknown,
            "avg_latency_ms": (
                round(sum(self.latencies) / len(self.latencies), 2)
                if self.latencies
                else 0
            ),
            "max_latency_ms": max(self.latencies) if self.latencies else 0,
            "avg_cpu_percent": (
                round(sum(self.cpu_samples) / len(self.cpu_samples), 2)
                if self.cpu_samples
                else 0
            ),
            "avg_memory_mb": (
                round(sum(self.memory_samples) / len(self.memory_samples), 2)
                if self.memory_samples
                else 0
            ),
        }

    def save_report(self, output_dir="results"):
        Path(output_dir).mkdir(parents=True, exist_ok=True)
        report = self.get_report()

        filename = Path(output_dir) / (
            f"{self.run_name}_{datetime.now().strftime('%Y%m%d_%H%M%S')}.json"
        )
        with open(filename, "w") as f:
            json.dump(report, f, indent=2)

        logger.info("Report saved: %s", filename)
        return report
