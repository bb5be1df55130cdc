"""
Newline-delimited UTF-8 framing shared by the outbound and inbound paths.

Outbound text is encoded as one line per message. Inbound bytes accumulate in
a byte buffer; each complete line is cut off the front of the buffer in
arrival order, decoded, trimmed, and emitted unless it is blank.
"""

ENCODING = "utf-8"
LINE_TERMINATOR = "\n"
LINE_TERMINATOR_BYTES = LINE_TERMINATOR.encode(ENCODING)


class FramingError(ValueError):
    """Raised when outbound text cannot be framed as a single line."""


def encode_line(text: str) -> bytes:
    """
    Encode a single message as a newline-terminated UTF-8 line.

    Raises:
        FramingError: If the text itself contains a newline
    """
    if LINE_TERMINATOR in text:
        raise FramingError("Outbound message must not contain embedded newlines")

    return (text + LINE_TERMINATOR).encode(ENCODING)


def split_lines(buffer: bytes) -> tuple[bytes, list[str]]:
    """
    Cut every complete line off the front of ``buffer``, earliest first.

    Lines are decoded only once their terminator has arrived. A newline byte
    never occurs inside a multi-byte UTF-8 sequence, so a character split
    across reads stays intact in the pending bytes.

    Returns:
        Tuple of (bytes after the last newline, trimmed non-empty lines)
    """
    lines = []

    newline_index = buffer.find(LINE_TERMINATOR_BYTES)
    while newline_index >= 0:
        line = buffer[:newline_index].decode(ENCODING, errors="replace").strip()
        buffer = buffer[newline_index + 1:]

        if line:
            lines.append(line)

        newline_index = buffer.find(LINE_TERMINATOR_BYTES)

    return buffer, lines


def extract_lines(buffer: bytes, new_bytes: bytes) -> tuple[bytes, list[str]]:
    """
    Append raw bytes to the buffer and extract every complete line.

    Args:
        buffer: Pending bytes of a partial line from previous reads
        new_bytes: Bytes just read from the socket

    Returns:
        Tuple of (remaining buffer, complete trimmed non-empty lines)

    Undecodable bytes are replaced rather than raised.
    """
    return split_lines(buffer + new_bytes)


class LineFramer:
    """Stateful inbound framer owning the receive buffer."""

    def __init__(self) -> None:
        self.buffer = b""
        self.lines_extracted = 0

    @property
    def pending(self) -> str:
        """Partial line received so far, decoded for display."""
        return self.buffer.decode(ENCODING, errors="replace")

    def feed(self, data: bytes) -> list[str]:
        """Feed raw bytes and return the complete lines they finish."""
        self.buffer, lines = extract_lines(self.buffer, data)
        self.lines_extracted += len(lines)
        return lines

    def reset(self) -> None:
        """Discard any partial line."""
        self.buffer = b""
