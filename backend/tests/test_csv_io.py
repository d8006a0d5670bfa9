import pytest

from sprintdesk.errors import CsvParseError, ImportFileError
from sprintdesk.services.csv_import import CSV_HEADERS, parse_story_row
from sprintdesk.services.csv_io import BOM, format_points, read_rows, write_rows


def test_read_rows_handles_quotes_commas_and_newlines():
    text = (
        "Epic,Story,Description,Developer,Story Points,Status\n"
        'Auth,"Login, with SSO","Line one\nLine ""two""",Ann,3,Open\n'
    )
    rows = read_rows(text.encode("utf-8"))
    assert rows[0] == CSV_HEADERS
    assert rows[1] == ["Auth", "Login, with SSO", 'Line one\nLine "two"', "Ann", "3", "Open"]


def test_read_rows_strips_bom_and_whitespace():
    rows = read_rows((BOM + "Epic,Story\n  Auth , Login  \n").encode("utf-8"))
    assert rows == [["Epic", "Story"], ["Auth", "Login"]]


def test_read_rows_pads_short_and_cuts_long_records():
    rows = read_rows(b"a,b,c\n1\n1,2,3,4\n")
    assert rows[1] == ["1", "", ""]
    assert rows[2] == ["1", "2", "3"]


def test_read_rows_rejects_empty_and_binary_files():
    with pytest.raises(ImportFileError):
        read_rows(b"   \n")
    with pytest.raises(ImportFileError):
        read_rows(b"\xff\xfe\x00bad")


def test_write_rows_quotes_only_when_needed():
    text = write_rows(["Story", "Description"], [["Plain", 'Has, comma and "quote"']])
    assert text.startswith(BOM)
    assert text[len(BOM):] == 'Story,Description\nPlain,"Has, comma and ""quote"""\n'


def test_write_then_read_keeps_fields():
    fields = ["Auth", "Multi\nline", "x,y", "Ann", "2.5", "In Progress"]
    text = write_rows(CSV_HEADERS, [fields])
    assert read_rows(text.encode("utf-8"))[1] == fields


def test_format_points():
    assert format_points(None) == ""
    assert format_points(3.0) == "3"
    assert format_points(2.5) == "2.5"


def test_parse_story_row_bad_points():
    with pytest.raises(CsvParseError) as e:
        parse_story_row(["Auth", "Login", "", "", "lots", ""], 4)
    assert e.value.line_number == 4
    with pytest.raises(CsvParseError):
        parse_story_row(["Auth", "Login", "", "", "-1", ""], 5)


def test_parse_story_row_short_row():
    row = parse_story_row(["Auth", "Login"], 2)
    assert row.title == "Login"
    assert row.story_points is None
    assert row.status == ""


def test_read_rows_rejects_quote_left_open():
    text = (
        "Epic,Story,Description,Developer,Story Points,Status\r\n"
        'Auth,Login,"multi\r\nline",Ann,3,Open\r\n'
        'Auth,Bad,"unterminated,Ann,3,Open\r\n'
        "Auth,After,,Ann,2,Open\r\n"
    )
    with pytest.raises(ImportFileError):
        read_rows(text.encode("utf-8"))


def test_read_rows_keeps_quote_inside_unquoted_field():
    rows = read_rows(b'Epic,Story\nHardware,27" monitor\n')
    assert rows[1] == ["Hardware", '27" monitor']
