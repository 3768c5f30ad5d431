from __future__ import annotations

import io

import pytest

from tzdb_generator.errors import ParseError
from tzdb_generator.parse_tables import Country, Zone, parse_countries, parse_zones


def test_parse_countries_in_file_order() -> None:
    stream = io.BytesIO(b"US,United States\r\nCA,Canada\r\n")
    assert parse_countries(stream) == [
        Country(code="US", name="United States"),
        Country(code="CA", name="Canada"),
    ]


def test_parse_countries_handles_quoted_names_and_blank_lines() -> None:
    stream = io.BytesIO(b'\xef\xbb\xbfBO,"Bolivia, Plurinational State of"\n\nCI,C\xc3\xb4te d\'Ivoire\n')
    countries = parse_countries(stream)
    assert [c.name for c in countries] == ["Bolivia, Plurinational State of", "Côte d'Ivoire"]
    assert countries[0].code == "BO"
    assert all(c.zones == [] for c in countries)


def test_parse_zones_reads_code_and_name_columns() -> None:
    stream = io.BytesIO(b"1,AD,Europe/Andorra\n2,AE,Asia/Dubai\n")
    assert parse_zones(stream) == [
        Zone(country_code="AD", name="Europe/Andorra"),
        Zone(country_code="AE", name="Asia/Dubai"),
    ]


def test_empty_stream_is_not_an_error() -> None:
    assert parse_countries(io.BytesIO(b"")) == []
    assert parse_zones(io.BytesIO(b"")) == []


def test_wrong_column_count_reports_line() -> None:
    stream = io.BytesIO(b"1,AD,Europe/Andorra\n2,AE\n")
    with pytest.raises(ParseError) as excinfo:
        parse_zones(stream, table="zone.csv")
    assert excinfo.value.table == "zone.csv"
    assert excinfo.value.line == 2
    assert "expected 3 columns, got 2" in str(excinfo.value)


def test_country_row_with_extra_column_is_rejected() -> None:
    with pytest.raises(ParseError, match="expected 2 columns, got 3"):
        parse_countries(io.BytesIO(b"US,United States,extra\n"))


def test_undecodable_bytes_are_a_parse_error() -> None:
    with pytest.raises(ParseError):
        parse_countries(io.BytesIO(b"US,\xff\xfe\n"))


def test_decode_error_reports_the_offending_line_past_the_first_chunk() -> None:
    rows = b"".join(b"C%04d,Country %04d\n" % (i, i) for i in range(1, 3000))
    stream = io.BytesIO(rows + b"XX,\xff\n")
    with pytest.raises(ParseError) as excinfo:
        parse_countries(stream, table="country.csv")
    assert excinfo.value.line == 3000
    assert excinfo.value.table == "country.csv"


def test_decode_error_line_ignores_byte_order_mark() -> None:
    stream = io.BytesIO(b"\xef\xbb\xbfUS,United States\nCA,Can\xffada\n")
    with pytest.raises(ParseError) as excinfo:
        parse_countries(stream)
    assert excinfo.value.line == 2
