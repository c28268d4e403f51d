from __future__ import annotations

import dataclasses

import pytest
from hypothesis import given, strategies as st

from tle_stats.core import (
    ChecksumError,
    FormatError,
    IncompleteInputError,
    InconsistentRecordError,
    TleRecord,
    checksum,
    decode_line1,
    decode_line2,
    parse,
    split_lines,
)

BASE_NAME = "ISS (ZARYA)"
BASE_LINE1 = "1 25544U 98067A   21275.52921296  .00002182  00000-0  47654-4 0  9996"
BASE_LINE2 = "2 25544  51.6442 208.9163 0006703  69.9862  25.2906 15.48815743306985"
VANGUARD = (
    "VANGUARD 1",
    "1 00005U 58002B   21275.40000000  .00000023  00000-0  28098-4 0  9997",
    "2 00005  34.2682 348.7242 1859667 331.7664  19.3264 10.82419157413667",
)
NOAA = (
    "NOAA 19",
    "1 33591U 09005A   21274.50000000  .00000060  00000-0  57150-4 0  9994",
    "2 33591  99.1850 290.1000 0013940 245.0000 114.9000 14.12501077654328",
)


def _text_payload(include_name: bool, prefix_blanks: int, suffix_blanks: int, trailing_space: bool, newline: str) -> str:
    pad = " " if trailing_space else ""
    lines = ["" for _ in range(prefix_blanks)]
    if include_name:
        lines.append(BASE_NAME + pad)
    lines.append(BASE_LINE1 + pad)
    lines.append(BASE_LINE2 + pad)
    lines.extend("" for _ in range(suffix_blanks))
    return newline.join(lines)


@st.composite
def tle_payloads(draw) -> str:
    return _text_payload(
        include_name=draw(st.booleans()),
        prefix_blanks=draw(st.integers(min_value=0, max_value=3)),
        suffix_blanks=draw(st.integers(min_value=0, max_value=3)),
        trailing_space=draw(st.booleans()),
        newline=draw(st.sampled_from(["\n", "\r\n", "\r"])),
    )


@given(tle_payloads())
def test_parse_handles_noise(payload: str) -> None:
    records, rejected = parse(payload)
    assert rejected == []
    assert len(records) == 1
    record = records[0]
    assert record.name in ("", BASE_NAME)
    assert record.line1 == BASE_LINE1
    assert record.line2 == BASE_LINE2
    assert checksum(record.line1)
    assert checksum(record.line2)
    round_trip, _ = parse(record.as_text())
    assert round_trip == [record]


def test_two_line_record_has_empty_name() -> None:
    records, rejected = parse(f"{BASE_LINE1}\n{BASE_LINE2}\n")
    assert rejected == []
    assert [r.name for r in records] == [""]
    assert records[0].line1 == BASE_LINE1
    assert records[0].line2 == BASE_LINE2


def test_three_line_record_name_is_trimmed() -> None:
    records, _ = parse(f"   {BASE_NAME}   \n{BASE_LINE1}\n{BASE_LINE2}\n")
    assert records[0].name == BASE_NAME


def test_end_to_end_example() -> None:
    records, rejected = parse(f"{BASE_NAME}\n{BASE_LINE1}\n{BASE_LINE2}\n")
    assert rejected == []
    (record,) = records
    assert record.catalog_number == 25544
    assert record.classification == "U"
    assert record.international_designator == "98067A"
    assert record.launch_year == 1998
    assert record.epoch_year == 2021
    assert record.inclination_deg == pytest.approx(51.6442)
    assert record.eccentricity == pytest.approx(0.0006703)
    assert record.mean_motion_rev_per_day == pytest.approx(15.48815743)
    assert record.drag_term == pytest.approx(4.7654e-5)
    assert record.checksum1 == 6
    assert record.checksum2 == 5


def test_mixed_two_and_three_line_records_keep_input_order() -> None:
    text = "\n".join([BASE_LINE1, BASE_LINE2, *VANGUARD, *NOAA])
    records, rejected = parse(text)
    assert rejected == []
    assert [r.catalog_number for r in records] == [25544, 5, 33591]
    assert [r.name for r in records] == ["", "VANGUARD 1", "NOAA 19"]


def test_rejection_is_isolated_to_the_corrupted_record() -> None:
    corrupted = VANGUARD[1][:-1] + "0"
    text = "\n".join([BASE_NAME, BASE_LINE1, BASE_LINE2, VANGUARD[0], corrupted, VANGUARD[2], *NOAA])
    records, rejected = parse(text)
    assert [r.catalog_number for r in records] == [25544, 33591]
    assert len(rejected) == 1
    rejection = rejected[0]
    assert rejection.line_numbers == (4, 5, 6)
    assert rejection.kind == "checksum"
    assert isinstance(rejection.error, ChecksumError)
    assert rejection.error.line_numbers == (4, 5, 6)


def test_line_numbers_refer_to_original_positions() -> None:
    corrupted = BASE_LINE2[:-1] + "0"
    text = f"\n\n{BASE_NAME}\n\n{BASE_LINE1}\r\n{corrupted}\n"
    _, rejected = parse(text)
    assert rejected[0].line_numbers == (3, 5, 6)


def test_catalog_mismatch_is_an_inconsistent_record() -> None:
    records, rejected = parse(f"{BASE_LINE1}\n{NOAA[2]}\n")
    assert records == []
    assert isinstance(rejected[0].error, InconsistentRecordError)
    assert rejected[0].kind == "inconsistent"
    assert "25544" in rejected[0].reason and "33591" in rejected[0].reason


def test_trailing_partial_group_is_reported_as_incomplete() -> None:
    text = "\n".join([BASE_NAME, BASE_LINE1, BASE_LINE2, NOAA[0], NOAA[1]])
    records, rejected = parse(text)
    assert len(records) == 1
    assert len(rejected) == 1
    assert isinstance(rejected[0].error, IncompleteInputError)
    assert rejected[0].line_numbers == (4, 5)


def test_lone_data_line_is_incomplete() -> None:
    records, rejected = parse(BASE_LINE1)
    assert records == []
    assert rejected[0].kind == "incomplete"
    assert rejected[0].line_numbers == (1,)


def test_format_error_outranks_checksum_error() -> None:
    bad_checksum = BASE_LINE1[:-1] + "0"
    bad_format = "2 25544  51.64 208.9163"
    _, rejected = parse(f"{bad_checksum}\n{bad_format}\n")
    assert isinstance(rejected[0].error, FormatError)
    assert "line 2" in rejected[0].reason


def test_line_one_wins_when_both_lines_are_malformed() -> None:
    _, rejected = parse("1 garbage\n2 garbage\n")
    assert isinstance(rejected[0].error, FormatError)
    assert rejected[0].reason.startswith("line 1")


def test_line_two_first_is_rejected_as_malformed() -> None:
    records, rejected = parse(f"{BASE_LINE2}\n{BASE_LINE1}\n")
    assert records == []
    assert rejected[0].kind == "format"
    assert rejected[0].line_numbers == (1, 2)


def test_parse_continues_after_malformed_name_group() -> None:
    text = "\n".join(["JUNK", "not a tle", "still not", *NOAA])
    records, rejected = parse(text)
    assert [r.catalog_number for r in records] == [33591]
    assert rejected[0].line_numbers == (1, 2, 3)


def test_empty_input_yields_nothing() -> None:
    assert parse("") == ([], [])
    assert parse("\n \r\n\t\n") == ([], [])


def test_parse_returns_fresh_sequences() -> None:
    text = f"{BASE_LINE1}\n{BASE_LINE2}\n"
    first = parse(text)
    second = parse(text)
    assert first == second
    assert first.records is not second.records


def test_redecoding_stored_lines_is_idempotent() -> None:
    records, _ = parse("\n".join([*VANGUARD, *NOAA]))
    for record in records:
        again = TleRecord.from_fields(
            record.name, record.line1, record.line2, decode_line1(record.line1), decode_line2(record.line2)
        )
        assert again == record


def test_records_are_immutable() -> None:
    records, _ = parse(f"{BASE_LINE1}\n{BASE_LINE2}\n")
    with pytest.raises(dataclasses.FrozenInstanceError):
        records[0].name = "changed"  # type: ignore[misc]


def test_split_lines_keeps_original_numbering() -> None:
    assert split_lines("a\r\n\r\nb\rc\n\n  d  ") == [(1, "a"), (3, "b"), (4, "c"), (6, "d")]
