"""Request Resilience Implementations.

Contains failure classification, backoff scheduling and the retry
executor with offline fallback.
Bounded Context: Request Resilience
"""
