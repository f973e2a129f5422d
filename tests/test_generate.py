import datetime as dt

from csv_processor.generate import collect_headers, download_filename, generate_csv
from csv_processor.models import ColumnMappings, Configuration
from csv_processor.parser import parse_csv
from csv_processor.transform import process_csv

DERIVED = {"US_DATE": "01/02/2023", "UK_DATE": "02/01/2023", "ISO_DATE": "2023-01-02", "CLEAN_AMOUNT": 100}


def test_empty_records_give_empty_string():
    assert generate_csv([]) == ""


def test_header_and_rows():
    records = [
        {"Date": "01/02/2023", "Amount": "100", "Description": "Test", **DERIVED},
        {
            "Date": "03/04/2023",
            "Amount": "200",
            "Description": "Test 2",
            "US_DATE": "03/04/2023",
            "UK_DATE": "04/03/2023",
            "ISO_DATE": "2023-03-04",
            "CLEAN_AMOUNT": 200.0,
        },
    ]
    expected = (
        "Date,Amount,Description,US_DATE,UK_DATE,ISO_DATE,CLEAN_AMOUNT\n"
        "01/02/2023,100,Test,01/02/2023,02/01/2023,2023-01-02,100\n"
        "03/04/2023,200,Test 2,03/04/2023,04/03/2023,2023-03-04,200"
    )
    assert generate_csv(records) == expected


def test_comma_values_are_quoted():
    assert generate_csv([{"Description": "Test, with comma", "Amount": "100"}]) == (
        'Description,Amount\n"Test, with comma",100'
    )


def test_quotes_are_doubled():
    assert generate_csv([{"Description": 'Test with "quotes"'}]) == (
        'Description\n"Test with ""quotes"""'
    )


def test_newlines_are_quoted():
    assert generate_csv([{"Memo": "line1\nline2"}]) == 'Memo\n"line1\nline2"'


def test_missing_keys_render_blank():
    records = [{"a": "1", "b": "2"}, {"a": "3", "c": "4"}]
    assert collect_headers(records) == ["a", "b", "c"]
    assert generate_csv(records) == "a,b,c\n1,2,\n3,,4"


def test_number_formatting():
    records = [{"n": 100}, {"n": -0.0}, {"n": 12.5}, {"n": -60.0}, {"n": None}]
    assert generate_csv(records) == "n\n100\n0\n12.5\n-60\n"


def test_round_trip_keeps_original_cells():
    text = 'Date,Description,Amount\n15/04/2023,"Coffee, large",-3.50\n16/04/2023,"The ""Shop""",12'
    doc = parse_csv(text)
    config = Configuration(column_mappings=ColumnMappings(date="Date", amount="Amount"))
    output = generate_csv(process_csv(doc, config))

    reparsed = parse_csv(output)
    header = reparsed.rows[0]
    assert header == ["Date", "Description", "Amount", "US_DATE", "UK_DATE", "ISO_DATE", "CLEAN_AMOUNT"]
    for original, row in zip(doc.rows[1:], reparsed.rows[1:]):
        assert row[:3] == original
    assert reparsed.rows[1][6] == "-3.5"
    assert reparsed.rows[2][5] == "2023-04-16"


def test_download_filename():
    assert download_filename(dt.date(2024, 3, 9)) == "csv_data_processed_2024-03-09.csv"


def test_non_finite_numbers():
    records = [{"n": float("inf")}, {"n": float("-inf")}, {"n": float("nan")}]
    assert generate_csv(records) == "n\nInfinity\n-Infinity\nNaN"


def test_overflowing_amount_renders_as_infinity():
    doc = parse_csv("Amount\n" + "9" * 400)
    config = Configuration(column_mappings=ColumnMappings(amount="Amount"))
    assert generate_csv(process_csv(doc, config)).endswith(",Infinity")
