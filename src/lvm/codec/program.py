''' Programs: ordered instruction sequences '''

import logging as lg
from dataclasses import dataclass
from typing import Iterable, Iterator, Tuple, Self

import pyparsing as pp

from lvm.common.formats import Radix, TextFormat
from lvm.common.isaconf import RECORD_SIZE
from lvm.codec.base import Codec
from lvm.codec.dispatch import InstructionSet, default
from lvm.codec.instructions import Instruction
import lvm.common.errors as err
import lvm.codec.grammar as g


@dataclass(frozen=True)
class Program(Codec):
    CONTEXT = 'program'

    instructions: Tuple[Instruction, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'instructions', tuple(self.instructions))

    @classmethod
    def make(cls, instructions: Iterable[Instruction]) -> Self:
        return cls(tuple(instructions))

    def __len__(self) -> int:
        return len(self.instructions)

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self.instructions)

    def __getitem__(self, index: int) -> Instruction:
        return self.instructions[index]

    # Text

    @classmethod
    def parse_text(
        cls,
        text: str,
        radix: Radix = Radix.DECIMAL,
        strict: bool = False,
        isa: InstructionSet = default
    ) -> Tuple[str, Self]:
        ''' Decodes separator-delimited instructions until the input is exhausted.

        In strict mode instructions are separated by line breaks, otherwise by
        any whitespace. Surrounding whitespace is ignored.
        '''
        instructions = []
        sep = g.separator(strict)

        with err.context(cls.CONTEXT):
            rest = text.lstrip()

            while rest:
                rest, instruction = isa.parse_text(rest, radix)
                instructions.append(instruction)

                if g.is_blank(rest):
                    rest = ''
                    break

                try:
                    rest, _ = g.scan(sep, rest)
                except pp.ParseException:
                    found = g.leading_word(rest.lstrip())
                    raise err.TrailingInput(f'{found} after {instruction.MNEMONIC}', rest)

        lg.debug(f'Decoded {len(instructions)} instructions from {len(text)} characters')
        return rest, cls.make(instructions)

    @classmethod
    def decode_text(
        cls,
        text: str,
        radix: Radix = Radix.DECIMAL,
        strict: bool = False,
        isa: InstructionSet = default
    ) -> Self:
        _, program = cls.parse_text(text, radix, strict, isa)
        return program

    def to_text(self, fmt: TextFormat = TextFormat.DECIMAL) -> str:
        return '\n'.join(instruction.to_text(fmt) for instruction in self.instructions)

    # Binary

    @classmethod
    def parse_bytes(cls, data: bytes, isa: InstructionSet = default) -> Tuple[bytes, Self]:
        instructions = list(cls.iter_bytes(data, isa))
        lg.debug(f'Decoded {len(instructions)} instructions from {len(data)} bytes')
        return b'', cls.make(instructions)

    @classmethod
    def decode_bytes(cls, data: bytes, isa: InstructionSet = default) -> Self:
        _, program = cls.parse_bytes(data, isa)
        return program

    @classmethod
    def iter_bytes(cls, data: bytes, isa: InstructionSet = default) -> Iterator[Instruction]:
        ''' Yields instructions record by record '''
        rest = bytes(data)

        while rest:
            with err.context(cls.CONTEXT):
                if len(rest) < RECORD_SIZE:
                    raise err.UnexpectedEndOfInput(
                        f'{len(rest)} dangling bytes, records are {RECORD_SIZE} bytes', rest
                    )

                rest, instruction = isa.parse_bytes(rest)

            yield instruction

    def to_bytes(self) -> bytes:
        return b''.join(instruction.to_bytes() for instruction in self.instructions)
