"""
Wire protocol module.

Line framing over the TCP byte stream, the outbound tick record format and
the inbound text command grammar.
"""
