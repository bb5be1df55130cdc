"""
Trading host module.

The capability set the bridge consumes from a trading host, and an in-memory
paper host used by the runner and by tests.
"""
