from __future__ import annotations

import pytest

from srph_import.csvio.errors import ColumnCountMismatchError, MalformedInputError
from srph_import.csvio.tokenizer import split_cells, tokenize


def test_tokenize_header_and_rows():
    table = tokenize("name,category\nKeyboard,Peripherals\nMouse,Peripherals\n")
    assert table.header == ["name", "category"]
    assert table.rows == [(2, ["Keyboard", "Peripherals"]), (3, ["Mouse", "Peripherals"])]


def test_tokenize_skips_blank_lines_but_keeps_source_line_numbers():
    table = tokenize("a,b\n\n   \n1,2\n")
    assert table.rows == [(4, ["1", "2"])]


def test_tokenize_handles_crlf():
    table = tokenize("a,b\r\n1,2\r\n")
    assert table.header == ["a", "b"]
    assert table.rows == [(2, ["1", "2"])]


@pytest.mark.parametrize("content", ["", "\n\n", "a,b\n", "a,b\n  \n"])
def test_tokenize_requires_header_and_one_data_line(content: str):
    with pytest.raises(MalformedInputError) as e:
        tokenize(content)
    assert str(e.value) == "CSV file must contain at least a header row and one data row"


def test_tokenize_column_count_mismatch_reports_line():
    with pytest.raises(ColumnCountMismatchError) as e:
        tokenize("a,b\n1,2\n1,2,3\n")
    assert str(e.value) == "Line 3 has 3 values, but header has 2 columns"
    assert e.value.line_number == 3
    assert e.value.error_type == "COLUMN_COUNT_MISMATCH"


def test_split_cells_trims_and_unquotes_one_layer():
    assert split_cells('  "Dell Inc" , x ,""""') == ["Dell Inc", "x", '""']
    assert split_cells('"') == ['"']
    assert split_cells('""') == [""]


def test_comma_inside_quotes_still_splits():
    # no RFC 4180 quoting: the quoted comma adds a cell
    assert split_cells('x,"a, b"') == ["x", '"a', 'b"']
    with pytest.raises(ColumnCountMismatchError):
        tokenize('name,notes\nx,"a, b"\n')
