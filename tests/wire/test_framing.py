"""Tests for newline-delimited line framing."""

import pytest

from tickbridge.wire.framing import FramingError, LineFramer, encode_line, extract_lines


class TestEncodeLine:
    """Test outbound line encoding."""

    def test_appends_single_newline(self):
        assert encode_line('{"a":1}') == b'{"a":1}\n'

    def test_encodes_utf8(self):
        assert encode_line("café") == "café\n".encode("utf-8")

    def test_rejects_embedded_newline(self):
        with pytest.raises(FramingError):
            encode_line("BUY 1\nSELL 1")


class TestExtractLines:
    """Test the stateless extraction function."""

    def test_single_complete_line(self):
        buffer, lines = extract_lines(b"", b"BUY 1\n")
        assert lines == ["BUY 1"]
        assert buffer == b""

    def test_partial_line_stays_in_buffer(self):
        buffer, lines = extract_lines(b"", b"BUY 1\nSEL")
        assert lines == ["BUY 1"]
        assert buffer == b"SEL"

        buffer, lines = extract_lines(buffer, b"L 0.5\n")
        assert lines == ["SELL 0.5"]
        assert buffer == b""

    def test_multiple_lines_in_arrival_order(self):
        _, lines = extract_lines(b"", b"CLOSE\nBUY 1\nSELL 2\n")
        assert lines == ["CLOSE", "BUY 1", "SELL 2"]

    def test_blank_and_whitespace_lines_dropped(self):
        _, lines = extract_lines(b"", b"\n   \n\t\nCLOSE\n\n")
        assert lines == ["CLOSE"]

    def test_surrounding_whitespace_and_crlf_trimmed(self):
        _, lines = extract_lines(b"", b"  BUY 1 10 20  \r\n")
        assert lines == ["BUY 1 10 20"]

    def test_no_newline_produces_no_lines(self):
        buffer, lines = extract_lines(b"CLO", b"SE")
        assert lines == []
        assert buffer == b"CLOSE"

    def test_invalid_utf8_is_replaced(self):
        _, lines = extract_lines(b"", b"BUY \xff\n")
        assert lines == ["BUY \ufffd"]

    def test_multibyte_character_split_across_calls(self):
        data = "\u20acuro 1\n".encode("utf-8")

        buffer, first = extract_lines(b"", data[:2])
        buffer, second = extract_lines(buffer, data[2:])

        assert first == []
        assert second == ["\u20acuro 1"]
        assert buffer == b""

    @pytest.mark.parametrize("split_at", range(1, len("SELL 1\n\u20acuro 1\nCLOSE\n".encode("utf-8"))))
    def test_chunk_boundary_independence(self, split_at):
        stream = "SELL 1\n\u20acuro 1\nCLOSE\n".encode("utf-8")

        buffer, lines = extract_lines(b"", stream[:split_at])
        buffer, more = extract_lines(buffer, stream[split_at:])

        assert lines + more == ["SELL 1", "\u20acuro 1", "CLOSE"]
        assert buffer == b""


class TestLineFramer:
    """Test the stateful framer used by the command interpreter."""

    STREAM = "BUY 1.5 10 20\n  \nSELL 0.1\nCLOSE\n€uro 1\nBUY 2".encode("utf-8")
    EXPECTED = ["BUY 1.5 10 20", "SELL 0.1", "CLOSE", "€uro 1"]

    def test_whole_stream_in_one_chunk(self):
        framer = LineFramer()
        assert framer.feed(self.STREAM) == self.EXPECTED
        assert framer.buffer == b"BUY 2"

    @pytest.mark.parametrize("split_at", range(1, len(STREAM)))
    def test_chunk_boundary_independence(self, split_at):
        framer = LineFramer()
        lines = framer.feed(self.STREAM[:split_at]) + framer.feed(self.STREAM[split_at:])
        assert lines == self.EXPECTED
        assert framer.buffer == b"BUY 2"

    def test_byte_at_a_time(self):
        framer = LineFramer()
        lines = []
        for i in range(len(self.STREAM)):
            lines.extend(framer.feed(self.STREAM[i:i + 1]))
        assert lines == self.EXPECTED

    def test_counts_extracted_lines(self):
        framer = LineFramer()
        framer.feed(b"BUY 1\nSELL 1\n")
        framer.feed(b"CLOSE\n")
        assert framer.lines_extracted == 3

    def test_pending_decodes_partial_line(self):
        framer = LineFramer()
        framer.feed("BUY 1\nSELL €".encode("utf-8"))
        assert framer.pending == "SELL €"

    def test_reset_discards_partial_line(self):
        framer = LineFramer()
        framer.feed(b"BUY 1\nSEL")
        framer.reset()
        assert framer.buffer == b""
        assert framer.feed(b"CLOSE\n") == ["CLOSE"]

    def test_reset_discards_split_multibyte_sequence(self):
        framer = LineFramer()
        framer.feed("€".encode("utf-8")[:2])
        framer.reset()
        assert framer.feed(b"CLOSE\n") == ["CLOSE"]
