import pytest

from lvm.common.formats import Radix, TextFormat
from lvm.codec.primitives import RIndex, Operand8, Operand16
import lvm.common.errors as err


def test_rindex_to_text():
    rindx = RIndex(10)
    assert rindx.to_text() == '$10'
    assert str(rindx) == '$10'
    assert rindx.to_text(TextFormat.UPPER_HEX) == '0A'
    assert rindx.to_text(TextFormat.LOWER_HEX) == '0a'


def test_operands_to_text():
    assert Operand8(10).to_text() == '#10'
    assert Operand8(10).to_text(TextFormat.UPPER_HEX) == '0A'
    assert Operand16(10).to_text() == '#10'
    assert Operand16(10).to_text(TextFormat.UPPER_HEX) == '000A'
    assert Operand16(500).to_text(TextFormat.LOWER_HEX) == '01f4'


def test_rindex_parse_text():
    rest, rindx = RIndex.parse_text('$10 ABC')
    assert rest == ' ABC'
    assert rindx == RIndex(10)
    assert int(rindx) == 10


def test_rindex_parse_hex_text():
    rest, rindx = RIndex.parse_text('$0A ABC', Radix.HEXADECIMAL)
    assert rest == ' ABC'
    assert rindx == RIndex(10)


def test_hex_text_is_case_insensitive_and_prefix_optional():
    assert Operand16.decode_text('#01f4', Radix.HEXADECIMAL) == Operand16(500)
    assert Operand16.decode_text('#01F4', Radix.HEXADECIMAL) == Operand16(500)
    assert Operand16.decode_text('01F4', Radix.HEXADECIMAL) == Operand16(500)


def test_decimal_digits_stop_at_hex_letters():
    rest, oprnd = Operand16.parse_text('#12AB')
    assert rest == 'AB'
    assert oprnd == Operand16(12)


def test_missing_prefix():
    with pytest.raises(err.MalformedOperand) as e:
        RIndex.parse_text('10')

    assert e.value.context == ['register']


def test_prefix_without_digits():
    with pytest.raises(err.MalformedOperand):
        Operand16.parse_text('# 10')

    with pytest.raises(err.MalformedOperand):
        RIndex.parse_text('$', Radix.HEXADECIMAL)


def test_wrong_prefix():
    with pytest.raises(err.MalformedOperand):
        Operand16.parse_text('$10')


def test_out_of_range_text():
    with pytest.raises(err.ValueOutOfRange) as e:
        RIndex.parse_text('$256')

    assert e.value.value == 256
    assert e.value.limit == 255
    assert str(e.value) == 'register: value out of range (256 > 255)'

    with pytest.raises(err.ValueOutOfRange):
        Operand16.parse_text('#10000', Radix.HEXADECIMAL)

    assert Operand16.decode_text('#65535') == Operand16(0xFFFF)


def test_out_of_range_construction():
    with pytest.raises(err.ValueOutOfRange):
        Operand8(256)

    with pytest.raises(err.ValueOutOfRange):
        Operand16(-1)

    with pytest.raises(TypeError):
        RIndex('10')


def test_parse_bytes():
    rest, oprnd = Operand16.parse_bytes(bytes([1, 2, 3]))
    assert oprnd == Operand16((1 << 8) + 2)
    assert rest == bytes([3])

    rest, rindx = RIndex.parse_bytes(bytes([10, 2]))
    assert rindx == RIndex(10)
    assert rest == bytes([2])


def test_parse_bytes_truncated():
    with pytest.raises(err.UnexpectedEndOfInput) as e:
        Operand16.parse_bytes(bytes([1]))

    assert e.value.context == ['operand16']

    with pytest.raises(err.UnexpectedEndOfInput):
        Operand8.parse_bytes(b'')


def test_to_bytes():
    assert Operand16(500).to_bytes() == bytes([1, 0xF4])
    assert Operand8(7).to_bytes() == bytes([7])
    assert RIndex(255).to_bytes() == bytes([255])


def test_decode_requires_full_consumption():
    with pytest.raises(err.TrailingInput):
        RIndex.decode_text('$10 $20')

    with pytest.raises(err.TrailingInput):
        Operand8.decode_bytes(bytes([1, 2]))

    assert RIndex.decode_text('$10  ') == RIndex(10)


@pytest.mark.parametrize('kind', [RIndex, Operand8, Operand16])
@pytest.mark.parametrize('fmt', list(TextFormat))
def test_round_trip_limits(kind, fmt):
    for value in (0, 1, kind.max_value()):
        item = kind(value)
        assert kind.decode_text(item.to_text(fmt), fmt.radix) == item
        assert kind.decode_bytes(item.to_bytes()) == item
        assert len(item.to_bytes()) == kind.WIDTH


def test_distinct_types_are_not_equal():
    assert RIndex(10) != Operand8(10)


def test_long_digit_runs():
    with pytest.raises(err.ValueOutOfRange) as e:
        RIndex.parse_text('$' + '9' * 5000)

    assert e.value.limit == 255
    assert str(e.value) == 'register: value out of range (5000-digit value > 255)'

    with pytest.raises(err.ValueOutOfRange):
        Operand16.parse_text('#' + 'F' * 5000, Radix.HEXADECIMAL)

    rest, rindx = RIndex.parse_text('$' + '0' * 5000 + '1 ABC')
    assert rest == ' ABC'
    assert rindx == RIndex(1)

    assert Operand16.decode_text('0' * 5000 + 'FFFF', Radix.HEXADECIMAL) == Operand16(0xFFFF)
    assert Operand8.decode_text('#' + '0' * 5000) == Operand8(0)
