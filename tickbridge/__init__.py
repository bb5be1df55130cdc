"""
TickBridge - Market Data / Order Execution TCP Bridge

Streams bid/ask ticks from a trading host to an external consumer process as
newline-delimited JSON over a persistent TCP connection, and turns the text
commands the consumer sends back (BUY, SELL, CLOSE) into orders on the host.
"""

__version__ = "0.1.0"
__author__ = "TickBridge Team"
