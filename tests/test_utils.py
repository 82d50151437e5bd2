from datetime import datetime
from shotsorter import utils
import pytest


def test_parse_example_name():
    meta = utils.parse_stem("2025-06-07_170210376_Night'Flyn_Hotkey")
    assert meta.capture_date == "2025-06-07"
    assert meta.timestamp == "170210376"
    assert meta.character_name == "Night'Flyn"
    assert meta.event_type == "Hotkey"
    assert meta.suffix is None


def test_date_fields_are_decomposed():
    meta = utils.parse_stem("2025-06-07_170210376_Night'Flyn_Hotkey")
    assert (meta.year, meta.month, meta.day) == ("2025", "06", "07")


def test_parse_filename_strips_extension_and_keeps_name():
    meta = utils.parse_filename("2024-12-31_235959001_Aria_Level Up.png")
    assert meta.file_name == "2024-12-31_235959001_Aria_Level Up.png"
    assert meta.event_type == "Level Up"
    assert meta.character_name == "Aria"


def test_trailing_number_is_read_as_suffix():
    meta = utils.parse_stem("2025-06-07_170210376_Night'Flyn_Hotkey_2")
    assert meta.event_type == "Hotkey"
    assert meta.character_name == "Night'Flyn"
    assert meta.suffix == "2"


def test_numeric_event_is_misread_as_suffix():
    # known limitation: an all-digit event label looks like a suffix
    meta = utils.parse_stem("2025-06-07_170210376_Aria_Boss_1337")
    assert meta.event_type == "Boss"
    assert meta.suffix == "1337"


def test_non_ascii_digits_are_not_a_suffix():
    meta = utils.parse_stem("2025-06-07_1_Aria_Boss_\u0663")
    assert meta.event_type == "\u0663"
    assert meta.character_name == "Aria_Boss"
    assert meta.suffix is None


def test_three_separators_without_numeric_timestamp():
    meta = utils.parse_stem("2025-06-07_Night'Flyn_Extra_Hotkey")
    assert meta.timestamp == "Night'Flyn"
    assert meta.character_name == "Extra"
    assert meta.event_type == "Hotkey"


@pytest.mark.parametrize("stem", [
    "2025-06-07_170210376_Night'Flyn_Hotkey",
    "2025-06-07_170210376_Night'Flyn_Hotkey_2",
    "2023-01-02_1_Bob Smith_Loot Drop",
    "2030-10-10_abc_d_e_f_g",
])
def test_round_trip(stem):
    assert utils.parse_stem(stem).stem() == stem


@pytest.mark.parametrize("stem", [
    "1999-06-07_170210376_Night'Flyn_Hotkey",
    "Screenshot_170210376_Night'Flyn_Hotkey",
    "2025-06-07",
    "2025-06-07_170210376",
    "2025-06-07_Night'Flyn_Hotkey",
    "2025-06-07_170210376_Hotkey_5",
    "2025-6-7_170210376_Night'Flyn_Hotkey",
    "2025-06-07_1_Aria_",
    "",
])
def test_invalid_names_raise_invalid_format(stem):
    with pytest.raises(utils.InvalidFormat):
        utils.parse_stem(stem)


def test_missing_underscore_reason():
    with pytest.raises(utils.InvalidFormat) as exc:
        utils.parse_stem("2025-06-07")
    assert exc.value.reason == "no underscore found for event"


def test_invalid_format_is_value_error():
    assert issubclass(utils.InvalidFormat, ValueError)


@pytest.mark.parametrize("s, expected", [
    ("2025-06-07_170210", datetime(2025, 6, 7, 17, 2, 10)),
    ("2025-06-07 17:02:10", datetime(2025, 6, 7, 17, 2, 10)),
    ("2025:06:07 17:02:10", datetime(2025, 6, 7, 17, 2, 10)),
    ("June 7 2025 5:02pm", datetime(2025, 6, 7, 17, 2)),
])
def test_parse_date(s, expected):
    assert utils.parse_date(s) == expected


@pytest.mark.parametrize("s", ["notadate", "", None])
def test_parse_date_invalid(s):
    assert utils.parse_date(s) is None
