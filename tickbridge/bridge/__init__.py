"""
TCP bridge module.

Connection lifecycle with fixed-interval reconnect, the outbound tick
publisher, the inbound command interpreter and the per-tick driver loop.
"""
