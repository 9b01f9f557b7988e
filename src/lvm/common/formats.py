from enum import Enum

import pyparsing as pp


class Radix(Enum):
    ''' Digit alphabet accepted by the text parsers '''
    DECIMAL = 10
    HEXADECIMAL = 16

    @property
    def digits(self) -> str:
        if self is Radix.HEXADECIMAL:
            return pp.hexnums

        return pp.nums


class TextFormat(Enum):
    ''' Rendering requested from the text serializers '''
    DECIMAL = 'dec'
    UPPER_HEX = 'HEX'
    LOWER_HEX = 'hex'

    @property
    def radix(self) -> Radix:
        if self is TextFormat.DECIMAL:
            return Radix.DECIMAL

        return Radix.HEXADECIMAL

    def hex_digits(self, value: int, width: int) -> str:
        ''' Zero-padded hex rendering of `value` occupying `width` bytes '''
        case = 'X' if self is TextFormat.UPPER_HEX else 'x'
        return f'{value:0{width * 2}{case}}'
