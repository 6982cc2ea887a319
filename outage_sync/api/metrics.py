"""Metrics collection for the outage API layer."""

from dataclasses import dataclass, field
from typing import ClassVar

from outage_sync.api.errors import ApiErrorClass


@dataclass
class ApiMetrics:
    """Counters for API calls.

    Singleton class that tracks attempts per status code, retries,
    and terminal failures per error class.
    """

    api_attempts_total: int = 0
    api_responses_total: dict[int, int] = field(default_factory=dict)
    api_retry_total: int = 0
    api_failures_total: dict[str, int] = field(default_factory=dict)
    api_success_total: int = 0

    _instance: ClassVar["ApiMetrics | None"] = None

    @classmethod
    def get_instance(cls) -> "ApiMetrics":
        """Get singleton metrics instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset metrics (primarily for testing)."""
        cls._instance = None

    def record_attempt(self, status_code: int | None) -> None:
        """Record a single attempt.

        Args:
            status_code: HTTP status code, or None if no response was received.
        """
        self.api_attempts_total += 1
        if status_code is not None:
            self.api_responses_total[status_code] = (
                self.api_responses_total.get(status_code, 0) + 1
            )

    def record_retry(self) -> None:
        """Record a retry after a server error."""
        self.api_retry_total += 1

    def record_success(self) -> None:
        """Record a call that completed successfully."""
        self.api_success_total += 1

    def record_failure(self, error_class: ApiErrorClass) -> None:
        """Record a terminal failure.

        Args:
            error_class: Classification of the failure.
        """
        key = error_class.value
        self.api_failures_total[key] = self.api_failures_total.get(key, 0) + 1

    def to_dict(self) -> dict[str, int | dict[str, int] | dict[int, int]]:
        """Convert metrics to dictionary.

        Returns:
            Dictionary of metric name to value.
        """
        return {
            "api_attempts_total": self.api_attempts_total,
            "api_responses_total": dict(self.api_responses_total),
            "api_retry_total": self.api_retry_total,
            "api_failures_total": dict(self.api_failures_total),
            "api_success_total": self.api_success_total,
        }
