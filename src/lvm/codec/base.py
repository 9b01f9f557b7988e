from typing import Tuple, Self

from lvm.common.formats import Radix, TextFormat
import lvm.common.errors as err
import lvm.codec.grammar as g


class Codec:
    ''' Capabilities shared by every encodable value.

    Parsers follow the (remaining_input, value) convention; the decode_*
    variants additionally require the whole input to be consumed.
    '''

    CONTEXT: str = 'value'

    @classmethod
    def parse_text(cls, text: str, radix: Radix = Radix.DECIMAL) -> Tuple[str, Self]:
        raise NotImplementedError()

    @classmethod
    def parse_bytes(cls, data: bytes) -> Tuple[bytes, Self]:
        raise NotImplementedError()

    def to_text(self, fmt: TextFormat = TextFormat.DECIMAL) -> str:
        raise NotImplementedError()

    def to_bytes(self) -> bytes:
        raise NotImplementedError()

    @classmethod
    def decode_text(cls, text: str, radix: Radix = Radix.DECIMAL) -> Self:
        rest, value = cls.parse_text(text, radix)

        if not g.is_blank(rest):
            detail = f'{g.leading_word(rest.lstrip())} after {cls.CONTEXT}'
            raise err.TrailingInput(detail, rest).within(cls.CONTEXT)

        return value

    @classmethod
    def decode_bytes(cls, data: bytes) -> Self:
        rest, value = cls.parse_bytes(data)

        if rest:
            detail = f'{len(rest)} bytes after {cls.CONTEXT}'
            raise err.TrailingInput(detail, rest).within(cls.CONTEXT)

        return value

    def __str__(self) -> str:
        return self.to_text()
