from assvtt.utils import escape_entities, normalize_timestamp, replace_whitespace


def test_normalize_timestamp_pads_single_digit_hour():
    assert normalize_timestamp("0:00:02.00") == "00:00:02.000"
    assert normalize_timestamp("1:23:45.67") == "01:23:45.670"


def test_normalize_timestamp_keeps_two_digit_hour():
    assert normalize_timestamp("12:00:02.00") == "12:00:02.000"


def test_normalize_timestamp_blank_defaults_to_zero():
    assert normalize_timestamp("") == "00:00:00.000"
    assert normalize_timestamp("   ") == "00:00:00.000"


def test_escape_entities_order():
    assert escape_entities("a < b & c > d") == "a &lt; b &amp; c &gt; d"
    assert escape_entities("<>") == "&lt;&gt;"


def test_escape_entities_is_not_idempotent():
    assert escape_entities("&amp;") == "&amp;amp;"


def test_replace_whitespace():
    assert replace_whitespace("one\\Ntwo") == "one\r\ntwo"
    assert replace_whitespace("one\\ntwo") == "one\r\ntwo"
    assert replace_whitespace("one\ntwo") == "one two"
    assert replace_whitespace("one\r\ntwo") == "one two"
    assert replace_whitespace("a\\hb") == "a&nbsp;b"
