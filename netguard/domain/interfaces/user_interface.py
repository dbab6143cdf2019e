"""Interface for presenting results to the user.

Defines the contract for displaying information, errors, warnings,
connectivity status and retry outcomes, allowing different UI
implementations (e.g., console, mobile view adapters).
"""

import abc
from typing import Any, List

from netguard.domain.models.network import NetworkStatus, RetryOutcome

class UserInterface(abc.ABC):
    """Abstract Base Class for user interaction."""

    @abc.abstractmethod
    def display_output(self, output: Any, **kwargs: Any) -> None:
        """Displays standard output to the user.

        Args:
            output: The value to display (rendered as JSON when structured).
            **kwargs: Additional arguments for formatting (e.g., title).
        """
        pass

    @abc.abstractmethod
    def display_error(self, error_message: str, **kwargs: Any) -> None:
        """Displays an error message to the user.

        Args:
            error_message: The error message string.
            **kwargs: Additional arguments for formatting.
        """
        pass

    @abc.abstractmethod
    def display_warning(self, warning_message: str, **kwargs: Any) -> None:
        """Displays a warning message to the user.

        Args:
            warning_message: The warning message string.
            **kwargs: Additional arguments for formatting.
        """
        pass

    @abc.abstractmethod
    def display_info(self, info_message: str, **kwargs: Any) -> None:
        """Displays an informational message to the user.

        Args:
            info_message: The informational message string.
            **kwargs: Additional arguments for formatting.
        """
        pass

    @abc.abstractmethod
    def display_status(self, status: NetworkStatus) -> None:
        """Displays a connectivity snapshot."""
        pass

    @abc.abstractmethod
    def display_outcome(self, outcome: RetryOutcome) -> None:
        """Displays the result of a retried request, flagging offline data."""
        pass

    def display_backoff_schedule(self, delays_ms: List[int]) -> None:
        """Displays the wait before each retry attempt.

        Args:
            delays_ms: Delay in milliseconds, indexed by attempt.
        """
        pass
