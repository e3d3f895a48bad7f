import pytest

from printprep.units import Length, LengthUnit, ParseError, convert_length, parse_length


def test_parse_length_defaults_to_pixels() -> None:
    length = parse_length("1024")
    assert length.value == 1024.0
    assert length.unit == LengthUnit.PX


@pytest.mark.parametrize(
    ("text", "value", "unit"),
    [
        ("5cm", 5.0, LengthUnit.CM),
        ("10in", 10.0, LengthUnit.INCH),
        ("3.5mm", 3.5, LengthUnit.MM),
        ("12px", 12.0, LengthUnit.PX),
        (" 2.5 cm ", 2.5, LengthUnit.CM),
        (".5in", 0.5, LengthUnit.INCH),
    ],
)
def test_parse_length_with_unit(text: str, value: float, unit: LengthUnit) -> None:
    length = parse_length(text)
    assert length.value == value
    assert length.unit == unit


@pytest.mark.parametrize("text", ["", "cm", "abc", "5c", "5xx", "1.2.3mm", "5 c m", "1e"])
def test_parse_length_rejects_malformed_input(text: str) -> None:
    with pytest.raises(ParseError) as info:
        parse_length(text)
    assert info.value.value == text
    assert "px|cm|mm|in" in info.value.expected


def test_pixel_lengths_are_integral() -> None:
    assert Length.px(10.4).value == 10.0
    assert Length.px(10.5).value == 11.0
    assert parse_length("10.6px").value == 11.0
    assert Length.cm(10.6).value == 10.6


def test_unit_conversion_matches_reference_values() -> None:
    mm = Length.mm(2540)
    cm = Length.cm(254)
    inch = Length.inch(100)
    px = Length.px(30000)

    assert cm.to(LengthUnit.PX, 300) == px
    assert inch.to(LengthUnit.PX, 300) == px
    assert mm.to(LengthUnit.PX, 300) == px

    assert cm.to(LengthUnit.MM, 300).value == pytest.approx(mm.value)
    assert cm.to(LengthUnit.INCH, 300).value == pytest.approx(inch.value)
    assert inch.to(LengthUnit.CM, 300).value == pytest.approx(cm.value)

    assert px.to(LengthUnit.CM, 300).value == pytest.approx(254, abs=1e-6)
    assert px.to(LengthUnit.MM, 300).value == pytest.approx(2540, abs=1e-6)
    assert px.to(LengthUnit.INCH, 300).value == pytest.approx(100, abs=1e-6)


def test_identity_conversion_is_exact_for_any_dpi() -> None:
    length = Length.cm(3.3333333)
    for dpi in (1, 72, 300, 1200.5):
        assert length.to(LengthUnit.CM, dpi) == length
    assert Length.px(17).to(LengthUnit.PX, 96) == Length.px(17)


def test_conversion_to_pixels_rounds_at_conversion_time() -> None:
    # 5mm at 300 dpi is 59.055 px
    assert Length.mm(5).to_px(300) == Length.px(59)
    assert Length.mm(5).pixels(300) == 59
    assert Length.px(59).to(LengthUnit.MM, 300).value == pytest.approx(4.9953, abs=1e-4)


def test_round_trip_conversion_within_pixel_tolerance() -> None:
    dpi = 300
    for length in (Length.cm(10), Length.inch(4.2), Length.mm(33.3), Length.px(1234)):
        for first in LengthUnit:
            for second in LengthUnit:
                direct = convert_length(length, second, dpi)
                via = convert_length(convert_length(length, first, dpi), second, dpi)
                tolerance = Length.px(1).to(second, dpi).value
                assert via.value == pytest.approx(direct.value, abs=tolerance)


def test_conversion_requires_positive_dpi() -> None:
    with pytest.raises(ValueError):
        Length.cm(1).to(LengthUnit.PX, 0)


def test_needs_dpi() -> None:
    assert not Length.px(1).needs_dpi()
    assert Length.cm(1).needs_dpi()
    assert LengthUnit.INCH.needs_dpi()


def test_display_is_unit_aware() -> None:
    assert str(Length.cm(254)) == "254cm"
    assert str(Length.inch(100)) == "100in"
    assert str(Length.px(30000)) == "30000px"
    assert str(Length.inch(3.5)) == "3.5in"
    assert Length.cm(5) != Length.mm(50)


@pytest.mark.parametrize("text", ["1e400", "-1e400px", "1e999cm"])
def test_parse_length_rejects_overflowing_numbers(text: str) -> None:
    with pytest.raises(ParseError, match="malformed number"):
        parse_length(text)
