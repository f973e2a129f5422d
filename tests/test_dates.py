import pytest

from csv_processor.dates import (
    CalendarDate,
    convert_date,
    date_format_example,
    detect_date_format,
    format_date,
    parse_date,
    standardize_date_formats,
)

NYE = CalendarDate(day=31, month=12, year=2023)
NYE_ALL = {"US_DATE": "12/31/2023", "UK_DATE": "31/12/2023", "ISO_DATE": "2023-12-31"}
BLANK = {"US_DATE": "", "UK_DATE": "", "ISO_DATE": ""}


# --- parse_date ---

def test_parse_day_first():
    assert parse_date("31/12/2023", "DD/MM") == NYE


def test_parse_month_first():
    assert parse_date("12/31/2023", "MM/DD") == NYE


def test_parse_day_month_name():
    assert parse_date("31 Dec 2023", "DD MMM") == NYE
    assert parse_date("31 DEC 2023", "DD MMM") == NYE
    assert parse_date("  5   jan   2024 ", "DD MMM") == CalendarDate(5, 1, 2024)


@pytest.mark.parametrize("value", ["31-12-2023", "31.12.2023", " 31/12/2023 "])
def test_parse_accepts_any_separator(value):
    assert parse_date(value, "DD/MM") == NYE


def test_two_digit_years():
    assert parse_date("31/12/23", "DD/MM") == NYE
    assert parse_date("31/12/99", "DD/MM") == CalendarDate(31, 12, 1999)
    assert parse_date("01/01/49", "DD/MM").year == 2049
    assert parse_date("01/01/50", "DD/MM").year == 1950


@pytest.mark.parametrize(
    "value,source",
    [
        ("", "DD/MM"),
        (None, "DD/MM"),
        ("invalid", "DD/MM"),
        ("32/12/2023", "DD/MM"),
        ("31/13/2023", "DD/MM"),
        ("00/12/2023", "DD/MM"),
        ("31/12", "DD/MM"),
        ("31/12/2023/1", "DD/MM"),
        ("aa/12/2023", "DD/MM"),
        ("31 Foo 2023", "DD MMM"),
        ("31/12/2023", "DD MMM"),
        ("32 Jan 2023", "auto"),
    ],
)
def test_parse_failures_return_none(value, source):
    assert parse_date(value, source) is None


def test_no_days_in_month_check():
    assert parse_date("31/02/2023", "DD/MM") == CalendarDate(31, 2, 2023)


def test_auto_resolution():
    assert parse_date("31/12/2023", "auto") == NYE
    assert parse_date("12/31/2023", "auto") == NYE
    assert parse_date("31 Dec 2023", "auto") == NYE
    # ambiguous values are read month first
    assert parse_date("01/02/2023", "auto") == CalendarDate(2, 1, 2023)


# --- format_date / convert_date ---

def test_format_targets():
    assert format_date(NYE, "US_DATE") == "12/31/2023"
    assert format_date(NYE, "UK_DATE") == "31/12/2023"
    assert format_date(NYE, "ISO_DATE") == "2023-12-31"


def test_format_pads_day_and_month():
    date = CalendarDate(day=1, month=2, year=2023)
    assert format_date(date, "US_DATE") == "02/01/2023"
    assert format_date(date, "UK_DATE") == "01/02/2023"
    assert format_date(date, "ISO_DATE") == "2023-02-01"


def test_format_none_and_unknown_target():
    assert format_date(None, "US_DATE") == ""
    assert format_date(NYE, "JP_DATE") == ""


def test_convert_date():
    assert convert_date("31/12/2023", "DD/MM", "US_DATE") == "12/31/2023"
    assert convert_date("12/31/2023", "MM/DD", "UK_DATE") == "31/12/2023"
    assert convert_date("31 Dec 2023", "DD MMM", "ISO_DATE") == "2023-12-31"
    assert convert_date("invalid", "DD/MM", "US_DATE") == ""
    assert convert_date("31/12/2023", "auto", "US_DATE") == "12/31/2023"


# --- standardize_date_formats ---

@pytest.mark.parametrize(
    "value,source",
    [
        ("31/12/2023", "DD/MM"),
        ("12/31/2023", "MM/DD"),
        ("31 Dec 2023", "DD MMM"),
        ("31/12/2023", "auto"),
        ("31 Dec 2023", "auto"),
    ],
)
def test_standardize(value, source):
    assert standardize_date_formats(value, source) == NYE_ALL


def test_standardize_invalid_is_all_blank():
    assert standardize_date_formats("invalid", "DD/MM") == BLANK


# --- detect_date_format ---

def test_detect_day_first():
    assert detect_date_format(["15/04/2023", "22/05/2023", "31/01/2023"]) == "DD/MM"


def test_detect_month_first():
    assert detect_date_format(["04/15/2023", "05/22/2023", "01/31/2023"]) == "MM/DD"


def test_detect_day_month_name():
    assert detect_date_format(["15 Jan 2023", "22 Feb 2023", "31 Mar 2023"]) == "DD MMM"


def test_detect_ambiguous_defaults_to_month_first():
    assert detect_date_format(["01/02/2023", "03/04/2023", "05/06/2023"]) == "MM/DD"


def test_detect_empty_and_unrecognised():
    assert detect_date_format([]) == "auto"
    assert detect_date_format(["", ""]) == "auto"
    assert detect_date_format(["yesterday", "2023/01/15"]) == "auto"


def test_detect_prefers_day_month_name_in_mixed_sample():
    assert detect_date_format(["15/04/2023", "22 Feb 2023", "31/01/2023"]) == "DD MMM"


def test_detect_only_samples_first_twenty_values():
    values = ["01/02/2023"] * 20 + ["25/02/2023"]
    assert detect_date_format(values) == "MM/DD"


def test_date_format_examples():
    assert date_format_example("DD/MM") == "31/12/2023"
    assert date_format_example("DD MMM") == "31 Dec 2023"
    assert date_format_example("auto") == "Auto-detect"


@pytest.mark.parametrize("value", ["١٥/٠٤/٢٠٢٣", "١٥ Jan ٢٠٢٣"])
def test_non_ascii_digits_are_rejected(value):
    assert parse_date(value, "auto") is None
    assert detect_date_format([value]) == "auto"
