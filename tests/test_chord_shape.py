"""Unit tests for chord shape decoding and ChordDiagramModel queries."""

import pytest

from chordomatic.chord_shape import (
    ChordDiagramModel,
    ChordShape,
    InvalidEncodingError,
    StringKind,
    StringPosition,
    decode_symbol,
)


def test_decode_symbol_muted_and_open() -> None:
    assert decode_symbol("x") == StringPosition.muted()
    assert decode_symbol("0") == StringPosition.open()


def test_decode_symbol_digits() -> None:
    assert decode_symbol("1") == StringPosition(StringKind.FRETTED, 1)
    assert decode_symbol("9") == StringPosition(StringKind.FRETTED, 9)


def test_decode_symbol_letters_extend_to_fret_24() -> None:
    assert decode_symbol("a").fret == 10
    assert decode_symbol("f").fret == 15
    assert decode_symbol("o").fret == 24


@pytest.mark.parametrize("symbol", ["p", "X", "-", " ", "A", "10", ""])
def test_decode_symbol_rejects_unknown(symbol: str) -> None:
    with pytest.raises(InvalidEncodingError):
        decode_symbol(symbol)


def test_invalid_encoding_error_is_value_error() -> None:
    assert issubclass(InvalidEncodingError, ValueError)


def test_from_encoding_rejects_wrong_length() -> None:
    with pytest.raises(InvalidEncodingError):
        ChordShape.from_encoding("maj", "577765x")
    with pytest.raises(InvalidEncodingError):
        ChordShape.from_encoding("maj", "x3201")


def test_from_encoding_rejects_bad_symbol() -> None:
    with pytest.raises(InvalidEncodingError):
        ChordShape.from_encoding("maj", "x32z10")


def test_from_encoding_rejects_barre_out_of_range() -> None:
    with pytest.raises(InvalidEncodingError):
        ChordShape.from_encoding("maj", "x32010", barre_fret=25)


def test_encoding_is_lossless() -> None:
    shape = ChordShape.from_encoding("aug9", "8a89ox", 8)
    assert shape.encoding == "8a89ox"


def test_classify_string_c_shape() -> None:
    model = ChordDiagramModel.from_encoding("m", "x32010")
    assert [model.classify_string(i) for i in range(6)] == [
        StringPosition.muted(),
        StringPosition.fretted(3),
        StringPosition.fretted(2),
        StringPosition.open(),
        StringPosition.fretted(1),
        StringPosition.open(),
    ]


def test_classify_string_out_of_range() -> None:
    model = ChordDiagramModel.from_encoding("m", "x32010")
    with pytest.raises(IndexError):
        model.classify_string(6)
    with pytest.raises(IndexError):
        model.classify_string(-1)


def test_fret_range_seeded_by_default_barre() -> None:
    model = ChordDiagramModel.from_encoding("m", "x32010")
    assert model.fret_range() == (0, 3)
    assert model.offset_mode is False


def test_fret_range_high_shape() -> None:
    model = ChordDiagramModel.from_encoding("major", "57756x", 5)
    assert model.fret_range() == (5, 7)
    assert model.offset_mode is True


def test_fret_range_barre_extends_range() -> None:
    model = ChordDiagramModel.from_encoding("odd", "x6776x", 5)
    assert model.fret_range() == (5, 7)


def test_fret_range_without_fretted_strings() -> None:
    assert ChordDiagramModel.from_encoding("open", "x00000").fret_range() == (0, 0)
    assert ChordDiagramModel.from_encoding("open", "xx0000", 3).fret_range() == (3, 3)


def test_offset_mode_boundary() -> None:
    assert ChordDiagramModel.from_encoding("four", "x4321x").offset_mode is False
    assert ChordDiagramModel.from_encoding("five", "x5432x").offset_mode is True


def test_row_for_absolute_and_offset() -> None:
    absolute = ChordDiagramModel.from_encoding("m", "x32010")
    assert absolute.row_for(3) == 3

    offset = ChordDiagramModel.from_encoding("major", "57756x", 5)
    assert offset.row_for(5) == 1
    assert offset.row_for(6) == 2
    assert offset.row_for(7) == 3


def test_barre_span_leftmost_to_rightmost() -> None:
    model = ChordDiagramModel.from_encoding("major", "57756x", 5)
    assert model.barre_span() == (0, 3)


def test_barre_span_needs_two_strings() -> None:
    assert ChordDiagramModel.from_encoding("one", "x5776x", 5).barre_span() is None
    assert ChordDiagramModel.from_encoding("none", "x6776x", 5).barre_span() is None


def test_barre_span_ignores_open_strings_for_zero_barre() -> None:
    model = ChordDiagramModel.from_encoding("m", "x32010", 0)
    assert model.barre_span() is None
