''' Instruction dispatcher '''

import logging as lg
from typing import Dict, List, Tuple

import pyparsing as pp

from lvm.common.formats import Radix
from lvm.common.isaconf import RECORD_SIZE
from lvm.codec.instructions import Instruction, Load, Add
import lvm.common.errors as err
import lvm.codec.grammar as g


class InstructionSet:
    ''' Registry of opcode definitions.

    Text input is routed by its leading mnemonic, binary input by its
    leading tag byte.
    '''

    CONTEXT = 'instruction'

    by_id: Dict[int, type[Instruction]]
    by_mnemonic: Dict[str, type[Instruction]]

    def __init__(self):
        self.by_id = dict()
        self.by_mnemonic = dict()

    def register(self, kind: type[Instruction]):
        if kind.ID in self.by_id:
            raise ValueError(f'Duplicate opcode id 0x{kind.ID:02X} for {kind.MNEMONIC}')

        if kind.MNEMONIC in self.by_mnemonic:
            raise ValueError(f'Duplicate mnemonic {kind.MNEMONIC}')

        if kind.record_size() != RECORD_SIZE:
            raise ValueError(
                f'{kind.MNEMONIC} record is {kind.record_size()} bytes, expected {RECORD_SIZE}'
            )

        lg.debug(f'Registering {kind.MNEMONIC} as 0x{kind.ID:02X}')
        self.by_id[kind.ID] = kind
        self.by_mnemonic[kind.MNEMONIC] = kind
        g.reserve(kind.MNEMONIC)
        return kind

    def kinds(self) -> List[type[Instruction]]:
        return list(self.by_id.values())

    def parse_text(self, text: str, radix: Radix = Radix.DECIMAL) -> Tuple[str, Instruction]:
        with err.context(self.CONTEXT):
            text = text.lstrip()

            if not text:
                raise err.UnexpectedEndOfInput('expected mnemonic', text)

            try:
                _, tokens = g.scan(g.identifier, text)
            except pp.ParseException:
                raise err.UnknownMnemonic(g.first_word(text), text)

            kind = self.by_mnemonic.get(tokens[0])

            if kind is None:
                raise err.UnknownMnemonic(g.first_word(text), text)

            return kind.parse_text(text, radix)

    def parse_bytes(self, data: bytes) -> Tuple[bytes, Instruction]:
        with err.context(self.CONTEXT):
            if not data:
                raise err.UnexpectedEndOfInput('expected opcode', data)

            kind = self.by_id.get(data[0])

            if kind is None:
                raise err.UnknownOpcode(data[0], data)

            return kind.parse_bytes(data)

    def decode_text(self, text: str, radix: Radix = Radix.DECIMAL) -> Instruction:
        rest, instruction = self.parse_text(text, radix)

        if not g.is_blank(rest):
            detail = f'{g.leading_word(rest.lstrip())} after {instruction.MNEMONIC}'
            raise err.TrailingInput(detail, rest).within(self.CONTEXT)

        return instruction

    def decode_bytes(self, data: bytes) -> Instruction:
        rest, instruction = self.parse_bytes(data)

        if rest:
            raise err.TrailingInput(f'{len(rest)} bytes after record', rest).within(self.CONTEXT)

        return instruction


default = InstructionSet()
default.register(Load)
default.register(Add)


def parse_text(text: str, radix: Radix = Radix.DECIMAL) -> Tuple[str, Instruction]:
    return default.parse_text(text, radix)


def parse_bytes(data: bytes) -> Tuple[bytes, Instruction]:
    return default.parse_bytes(data)


def decode_text(text: str, radix: Radix = Radix.DECIMAL) -> Instruction:
    return default.decode_text(text, radix)


def decode_bytes(data: bytes) -> Instruction:
    return default.decode_bytes(data)
