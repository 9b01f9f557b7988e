''' Fixed-width values carried by instructions '''

import struct
from dataclasses import dataclass
from typing import ClassVar, Tuple, Self

import pyparsing as pp

from lvm.common.formats import Radix, TextFormat
from lvm.codec.base import Codec
import lvm.common.errors as err
import lvm.codec.grammar as g


@dataclass(frozen=True)
class Primitive(Codec):
    PREFIX: ClassVar[str]
    WIDTH: ClassVar[int]    # bytes
    FORMAT: ClassVar[str]   # struct format, big-endian

    value: int

    def __post_init__(self):
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise TypeError(f'{type(self).__name__} expects an int, got {self.value!r}')

        if self.value < 0 or self.value > self.max_value():
            raise err.ValueOutOfRange(self.value, self.max_value()).within(self.CONTEXT)

    @classmethod
    def max_value(cls) -> int:
        return (1 << (cls.WIDTH * 8)) - 1

    def __int__(self) -> int:
        return self.value

    @classmethod
    def max_digits(cls, radix: Radix) -> int:
        ''' Length of the largest value's digit run, leading zeros aside '''
        return len(f'{cls.max_value():x}' if radix is Radix.HEXADECIMAL else str(cls.max_value()))

    # Text

    @classmethod
    def parse_text(cls, text: str, radix: Radix = Radix.DECIMAL) -> Tuple[str, Self]:
        expected = f'{cls.PREFIX}<{radix.name.lower()} digits>'

        with err.context(cls.CONTEXT):
            try:
                rest, tokens = g.scan(g.prefixed_number(cls.PREFIX, radix), text)
            except pp.ParseException:
                found = g.leading_word(text)
                raise err.MalformedOperand(f'expected {expected}, found {found}', text)

            digits = tokens[0]

            if not text.startswith(cls.PREFIX) and digits in g.reserved:
                raise err.MalformedOperand(f'expected {expected}, found mnemonic {digits!r}', text)

            significant = digits.lstrip('0') or '0'

            if len(significant) > cls.max_digits(radix):
                raise err.ValueOutOfRange(f'{len(significant)}-digit value', cls.max_value(), text)

            value = int(significant, radix.value)

            if value > cls.max_value():
                raise err.ValueOutOfRange(value, cls.max_value(), text)

            return rest, cls(value)

    def to_text(self, fmt: TextFormat = TextFormat.DECIMAL) -> str:
        if fmt is TextFormat.DECIMAL:
            return f'{self.PREFIX}{self.value}'

        return fmt.hex_digits(self.value, self.WIDTH)

    # Binary

    @classmethod
    def parse_bytes(cls, data: bytes) -> Tuple[bytes, Self]:
        with err.context(cls.CONTEXT):
            if len(data) < cls.WIDTH:
                raise err.UnexpectedEndOfInput(f'need {cls.WIDTH} bytes, got {len(data)}', data)

            (value,) = struct.unpack(cls.FORMAT, data[:cls.WIDTH])
            return data[cls.WIDTH:], cls(value)

    def to_bytes(self) -> bytes:
        return struct.pack(self.FORMAT, self.value)


@dataclass(frozen=True)
class RIndex(Primitive):
    ''' Register index '''
    CONTEXT = 'register'
    PREFIX = '$'
    WIDTH = 1
    FORMAT = '>B'


@dataclass(frozen=True)
class Operand8(Primitive):
    CONTEXT = 'operand8'
    PREFIX = '#'
    WIDTH = 1
    FORMAT = '>B'


@dataclass(frozen=True)
class Operand16(Primitive):
    CONTEXT = 'operand16'
    PREFIX = '#'
    WIDTH = 2
    FORMAT = '>H'
