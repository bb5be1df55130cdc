"""
Utility functions module.

Time Semantics:
- Tick timestamps come from the trading host's server clock and are
  authoritative for the wire format
- Wall-clock time is only used as a fallback when the host supplies none
- The reconnect backoff uses a monotonic clock, never the server clock
"""
