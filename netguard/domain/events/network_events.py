"""Domain Events related to outbound requests and server health.

Examples include events for when attempts fail, retries are scheduled,
fallback data is substituted, or a health probe completes.
"""

from dataclasses import dataclass, field
import time
from typing import Callable, Optional


@dataclass
class DomainEvent:
    """Base class for domain events."""
    pass


# --- Request Events ---

@dataclass
class AttemptFailed(DomainEvent):
    """Event triggered when a single attempt of an operation fails."""
    operation: str
    attempt_number: int
    recoverable: bool
    error_type: str
    error_message: Optional[str] = None
    status_code: Optional[int] = None
    timestamp: float = field(default_factory=time.time)

@dataclass
class RetryScheduled(DomainEvent):
    """Event triggered when a retry is scheduled after a recoverable failure."""
    operation: str
    attempt_number: int
    delay_ms: int
    timestamp: float = field(default_factory=time.time)

@dataclass
class RequestSucceeded(DomainEvent):
    """Event triggered when an attempt succeeds."""
    operation: str
    attempts: int
    latency_ms: float
    timestamp: float = field(default_factory=time.time)

@dataclass
class RequestAborted(DomainEvent):
    """Event triggered when a non-recoverable failure stops the retry loop."""
    operation: str
    attempts: int
    status_code: Optional[int] = None
    timestamp: float = field(default_factory=time.time)

@dataclass
class OfflineFallbackTriggered(DomainEvent):
    """Event triggered when fallback data replaces a failed request."""
    operation: str
    attempts: int
    user_message: str
    timestamp: float = field(default_factory=time.time)

@dataclass
class FailurePropagated(DomainEvent):
    """Event triggered when the last failure is re-raised to the caller."""
    operation: str
    attempts: int
    error_type: str
    error_message: Optional[str] = None
    timestamp: float = field(default_factory=time.time)


# --- Health Events ---

@dataclass
class HealthCheckCompleted(DomainEvent):
    """Event triggered after every health probe, healthy or not."""
    url: str
    healthy: bool
    latency_ms: float
    status_code: Optional[int] = None
    reason: Optional[str] = None # e.g., 'timeout', 'ConnectError'
    timestamp: float = field(default_factory=time.time)


EventListener = Callable[[DomainEvent], None]
