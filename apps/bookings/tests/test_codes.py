"""Tests for access code and booking reference generation."""

from datetime import date

from apps.bookings.domain.codes import (
    ACCESS_CODE_PATTERN,
    BOOKING_REFERENCE_PATTERN,
    BookingCodeGenerator,
    SeededRandomSource,
    SystemRandomSource,
)


class ScriptedRandomSource:
    def __init__(self, values):
        self.values = list(values)

    def randbelow(self, n):
        return self.values.pop(0) % n


def test_access_code_is_zero_padded():
    generator = BookingCodeGenerator(ScriptedRandomSource([42, 999_999]))

    assert generator.access_code() == "000042"
    assert generator.access_code() == "999999"


def test_reference_uses_date_and_alphabet():
    generator = BookingCodeGenerator(ScriptedRandomSource([0, 25, 26, 35, 1]))

    assert generator.booking_reference(date(2024, 6, 1)) == "BK-20240601-AZ09B"


def test_system_source_produces_well_formed_codes():
    generator = BookingCodeGenerator(SystemRandomSource())

    for _ in range(200):
        assert ACCESS_CODE_PATTERN.match(generator.access_code())
        assert BOOKING_REFERENCE_PATTERN.match(generator.booking_reference(date(2025, 1, 31)))


def test_seeded_source_is_repeatable():
    first = BookingCodeGenerator(SeededRandomSource(7))
    second = BookingCodeGenerator(SeededRandomSource(7))

    assert [first.access_code() for _ in range(5)] == [second.access_code() for _ in range(5)]
