import io
import logging

import pytest

import vttcue
from vttcue import Alignment, Anchor, FormatError, LineType, WebVTTIngester
from vttcue.models import LINE_BREAK, Fragment


def test_end_to_end() -> None:
    vtt = (
        "WEBVTT\n"
        "\n"
        "00:00:00.000 --> 00:00:01.500 line:10% align:middle\n"
        "Hello\n"
        "world\n"
    )
    cues = WebVTTIngester().parse_text(vtt)
    assert len(cues) == 1
    cue = cues[0]
    assert cue.start_us == 0
    assert cue.end_us == 1_500_000
    assert cue.line_type is LineType.FRACTION
    assert cue.line == pytest.approx(0.10)
    assert cue.text_alignment is Alignment.CENTER
    assert cue.position is None
    assert cue.position_anchor is Anchor.MIDDLE
    assert cue.fragments == (Fragment("Hello"), LINE_BREAK, Fragment("world"))
    assert cue.text == "Hello\nworld"


def test_parse_binary_stream_with_bom_and_crlf() -> None:
    data = "\ufeffWEBVTT - title\r\nKind: captions\r\n\r\n1\r\n00:01.000 --> 00:02.000\r\nOne\r\n".encode("utf-8")
    stream = io.BytesIO(data)
    cues = WebVTTIngester().parse(stream)
    assert [c.text for c in cues] == ["One"]
    assert cues[0].start_us == 1_000_000
    # The caller's stream stays open
    assert not stream.closed


def test_bad_timestamp_cue_is_dropped(caplog: pytest.LogCaptureFixture) -> None:
    vtt = (
        "WEBVTT\n\n"
        "00:01.000 --> 00:02.000\nA\n\n"
        "00:xx.000 --> 00:03.000\nB\n\n"
        "00:04.000 --> 00:05.000\nC\n"
    )
    with caplog.at_level(logging.WARNING):
        cues = vttcue.parse_text(vtt)
    assert [c.text for c in cues] == ["A", "C"]
    assert "Skipping cue with bad header: 00:xx.000 --> 00:03.000" in caplog.text


def test_comment_block_is_skipped() -> None:
    vtt = (
        "WEBVTT\n\n"
        "00:01.000 --> 00:02.000\nFirst\n\n"
        "NOTE a comment\n"
        "00:02.000 --> 00:03.000\n"
        "still comment\n\n"
        "00:04.000 --> 00:05.000\nSecond\n"
    )
    cues = vttcue.parse_text(vtt)
    assert [c.text for c in cues] == ["First", "Second"]
    assert [c.start_us for c in cues] == [1_000_000, 4_000_000]


def test_metadata_block_is_not_parsed_as_cues() -> None:
    vtt = "WEBVTT\n00:01.000 --> 00:02.000\n\n00:03.000 --> 00:04.000\nReal\n"
    cues = vttcue.parse_text(vtt)
    assert [c.text for c in cues] == ["Real"]


def test_cue_settings_are_applied() -> None:
    vtt = "WEBVTT\n\n00:01.000 --> 00:02.000 align:end position:50% size:80% line:-2,end\nText\n"
    cue = vttcue.parse_text(vtt)[0]
    assert cue.text_alignment is Alignment.OPPOSITE
    assert cue.position == pytest.approx(0.5)
    assert cue.position_anchor is Anchor.END
    assert cue.size == pytest.approx(0.8)
    assert cue.line == -2.0
    assert cue.line_type is LineType.NUMBER
    assert cue.line_anchor is Anchor.END


def test_body_lines_are_trimmed_and_marked_up() -> None:
    vtt = "WEBVTT\n\n00:01.000 --> 00:02.000\n  <i>Hi</i>  \n there \n\n"
    cue = vttcue.parse_text(vtt)[0]
    assert cue.fragments == (Fragment("Hi", italic=True), LINE_BREAK, Fragment("there"))


def test_cue_without_text() -> None:
    cues = vttcue.parse_text("WEBVTT\n\n00:01.000 --> 00:02.000")
    assert len(cues) == 1
    assert cues[0].fragments == ()


@pytest.mark.parametrize("content", ["", "WEBVTTX\n\n00:01.000 --> 00:02.000\nA\n", "00:01.000 --> 00:02.000\nA\n"])
def test_invalid_header_is_fatal(content: str) -> None:
    with pytest.raises(FormatError):
        vttcue.parse_text(content)


def test_io_errors_propagate(tmp_path) -> None:
    with pytest.raises(OSError):
        vttcue.parse_file(str(tmp_path / "missing.vtt"))


def test_parse_file(tmp_path) -> None:
    path = tmp_path / "sample.vtt"
    path.write_bytes("WEBVTT\n\n00:00:01.000 --> 00:00:02.000\nCafé\n".encode("utf-8"))
    cues = vttcue.parse_file(str(path))
    assert cues[0].text == "Café"


def test_can_parse() -> None:
    ingester = WebVTTIngester()
    assert ingester.can_parse("text/vtt")
    assert not ingester.can_parse("application/x-subrip")
    assert not ingester.can_parse("text/vtt; charset=utf-8")
    assert not ingester.can_parse(None)


def test_ingester_is_reusable() -> None:
    ingester = WebVTTIngester()
    first = ingester.parse_text("WEBVTT\n\n00:01.000 --> 00:02.000\nA\nB\n")
    second = ingester.parse_text("WEBVTT\n\n00:01.000 --> 00:02.000\nC\n")
    assert first[0].text == "A\nB"
    assert second[0].text == "C"


class _DroppingStream(io.BytesIO):
    """A stream whose device goes away during the first read."""

    def read1(self, size=-1):
        self.close()
        raise OSError("device went away")

    read = read1


def test_read_error_on_closed_stream_propagates() -> None:
    with pytest.raises(OSError, match="device went away"):
        WebVTTIngester().parse(_DroppingStream(b"WEBVTT\n"))


def test_non_numeric_settings_are_skipped() -> None:
    vtt = "WEBVTT\n\n00:01.000 --> 00:02.000 line:1_0 size:٥٠% position:nan%\nx\n"
    cue = vttcue.parse_text(vtt)[0]
    assert cue.line is None
    assert cue.line_type is None
    assert cue.size is None
    assert cue.position is None
