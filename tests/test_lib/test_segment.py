"""Tests for grapheme cluster segmentation."""

from subst.lib.segment import segmentize

ARTIST = "\U0001F468\u200d\U0001F3A8"  # man, ZWJ, palette
SUPERHEROINE = "\U0001F9B8\u200d\u2640\ufe0f"


def test_ascii_is_split_per_character():
    assert segmentize("abc") == ["a", "b", "c"]


def test_empty_string():
    assert segmentize("") == []


def test_combining_mark_stays_with_base():
    assert segmentize("e\u0301x") == ["e\u0301", "x"]


def test_zwj_sequences_are_atomic():
    assert segmentize(f"{ARTIST}.name") == [ARTIST, ".", "n", "a", "m", "e"]
    assert segmentize(SUPERHEROINE) == [SUPERHEROINE]


def test_modifier_and_flag_sequences_are_atomic():
    thumbs = "\U0001F44D\U0001F3FD"
    flag = "\U0001F1EB\U0001F1F7"
    assert segmentize(thumbs + flag) == [thumbs, flag]


def test_segments_rejoin_to_input():
    text = f"{{{ARTIST}}} says he\u0301llo \U0001F642"
    assert "".join(segmentize(text)) == text
