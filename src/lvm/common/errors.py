''' Codec error taxonomy '''

from contextlib import contextmanager
from typing import List, Iterator


Remaining = str | bytes | None


class CodecError(Exception):
    ''' Base class for every decode failure.

    `context` is the path of components the failure travelled through,
    outermost first. `remaining` is the input left at the failure point.
    '''

    reason = 'codec error'

    context: List[str]
    detail: str
    remaining: Remaining

    def __init__(self, detail: str = '', remaining: Remaining = None):
        super().__init__(detail)
        self.detail = detail
        self.remaining = remaining
        self.context = []

    def within(self, label: str):
        self.context.insert(0, label)
        return self

    @property
    def path(self) -> str:
        return ' -> '.join(self.context)

    def __str__(self) -> str:
        message = self.reason

        if self.detail:
            message = f'{message} ({self.detail})'

        if self.context:
            message = f'{self.path}: {message}'

        return message


class UnknownMnemonic(CodecError):
    reason = 'unknown mnemonic'

    def __init__(self, word: str, remaining: Remaining = None):
        super().__init__(repr(word), remaining)
        self.word = word


class UnknownOpcode(CodecError):
    reason = 'unknown opcode'

    def __init__(self, opcode: int, remaining: Remaining = None):
        super().__init__(f'0x{opcode:02X}', remaining)
        self.opcode = opcode


class Mismatch(CodecError):
    ''' Input belongs to another opcode; dispatchers move on to the next one '''
    reason = 'opcode mismatch'


class MalformedOperand(CodecError):
    reason = 'malformed operand'


class ValueOutOfRange(CodecError):
    reason = 'value out of range'

    def __init__(self, value: int | str, limit: int, remaining: Remaining = None):
        super().__init__(f'{value} > {limit}', remaining)
        self.value = value
        self.limit = limit


class UnexpectedEndOfInput(CodecError):
    reason = 'unexpected end of input'


class TrailingInput(CodecError):
    reason = 'trailing input'


@contextmanager
def context(label: str) -> Iterator[None]:
    ''' Tags every codec error escaping the block with `label` '''
    try:
        yield
    except CodecError as e:
        e.within(label)
        raise
