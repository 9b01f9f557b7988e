''' Opcode definitions

An instruction is a frozen dataclass whose fields are its operands in
encoding order. Mnemonic, opcode id and field declarations are all the
codec needs: text and binary forms are derived from them.
'''

import struct
from dataclasses import dataclass, fields
from functools import cache
from typing import ClassVar, Tuple, List, Self

import pyparsing as pp

from lvm.common.formats import Radix, TextFormat
from lvm.common.isaconf import OPCODE_SIZE
from lvm.codec.base import Codec
from lvm.codec.primitives import Primitive, RIndex, Operand16
import lvm.common.errors as err
import lvm.codec.grammar as g


@dataclass(frozen=True)
class Instruction(Codec):
    MNEMONIC: ClassVar[str]
    ID: ClassVar[int]

    @classmethod
    @cache
    def operand_types(cls) -> Tuple[type[Primitive], ...]:
        return tuple(f.type for f in fields(cls))

    @classmethod
    def record_size(cls) -> int:
        return OPCODE_SIZE + sum(t.WIDTH for t in cls.operand_types())

    def operands(self) -> List[Primitive]:
        return [getattr(self, f.name) for f in fields(self)]

    # Text

    @classmethod
    def match_text(cls, text: str) -> str:
        try:
            rest, _ = g.scan(g.mnemonic(cls.MNEMONIC), text)
        except pp.ParseException:
            raise err.Mismatch(cls.MNEMONIC, text)

        return rest

    @classmethod
    def parse_text(cls, text: str, radix: Radix = Radix.DECIMAL) -> Tuple[str, Self]:
        rest = cls.match_text(text)

        with err.context(cls.CONTEXT):
            operands = []

            for kind in cls.operand_types():
                rest = g.expect(g.space, rest, f'whitespace before {kind.CONTEXT}')
                rest, operand = kind.parse_text(rest, radix)
                operands.append(operand)

            return rest, cls(*operands)

    def to_text(self, fmt: TextFormat = TextFormat.DECIMAL) -> str:
        return ' '.join([self.MNEMONIC] + [op.to_text(fmt) for op in self.operands()])

    # Binary

    @classmethod
    def match_bytes(cls, data: bytes) -> bytes:
        if not data or data[0] != cls.ID:
            raise err.Mismatch(cls.MNEMONIC, data)

        return data[OPCODE_SIZE:]

    @classmethod
    def parse_bytes(cls, data: bytes) -> Tuple[bytes, Self]:
        rest = cls.match_bytes(data)

        with err.context(cls.CONTEXT):
            operands = []

            for kind in cls.operand_types():
                rest, operand = kind.parse_bytes(rest)
                operands.append(operand)

            return rest, cls(*operands)

    def to_bytes(self) -> bytes:
        head = struct.pack('>B', self.ID)
        return head + b''.join(op.to_bytes() for op in self.operands())


@dataclass(frozen=True)
class Load(Instruction):
    ''' LOAD $reg #imm16: register <- immediate '''
    CONTEXT = 'load'
    MNEMONIC = 'LOAD'
    ID = 0x01

    register: RIndex
    value: Operand16


@dataclass(frozen=True)
class Add(Instruction):
    ''' ADD $src1 $src2 $dest: dest <- src1 + src2 '''
    CONTEXT = 'add'
    MNEMONIC = 'ADD'
    ID = 0x02

    source1: RIndex
    source2: RIndex
    dest: RIndex
