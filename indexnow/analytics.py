"""Running submission counters."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Analytics:
    total_submissions: int = 0
    successful_submissions: int = 0
    failed_submissions: int = 0
    average_response_time: float = 0.0


class AnalyticsAggregator:
    def __init__(self):
        self.total_submissions = 0
        self.successful_submissions = 0
        self.failed_submissions = 0
        self.average_response_time = 0.0

    def record_success(self, count: int, elapsed_ms: float) -> None:
        """Count `count` URLs as submitted and fold the batch latency into the average.

        The whole batch counts as one latency sample weighted against the
        previous URL total: (avg * old_total + elapsed) / new_total.
        """
        old_total = self.total_submissions
        self.total_submissions += count
        self.successful_submissions += count
        if self.total_submissions:
            self.average_response_time = (
                self.average_response_time * old_total + elapsed_ms
            ) / self.total_submissions

    def record_failure(self, count: int) -> None:
        self.total_submissions += count
        self.failed_submissions += count

    def snapshot(self) -> Analytics:
        return Analytics(
            total_submissions=self.total_submissions,
            successful_submissions=self.successful_submissions,
            failed_submissions=self.failed_submissions,
            average_response_time=self.average_response_time,
        )
