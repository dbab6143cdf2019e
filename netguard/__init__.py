"""netguard: client-side network resilience layer.

Retry with exponential backoff, offline fallback, user-facing error
messages and a bounded-time server health probe.
"""

__version__ = "0.1.0"
