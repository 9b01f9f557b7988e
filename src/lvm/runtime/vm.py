import logging as lg
from typing import Iterable, List

from lvm.common.formats import TextFormat
from lvm.common.isaconf import REGISTER_COUNT, REGISTER_MASK
from lvm.codec.instructions import Instruction, Load, Add


class ExecutionError(Exception):
    pass


class RegisterError(ExecutionError):
    pass


class UnsupportedInstruction(ExecutionError):
    pass


class VM:
    registers: List[int]    # 16-bit general purpose registers

    def __init__(self):
        self.registers = [0] * REGISTER_COUNT

    # - Helpers - #

    def slot(self, index: int) -> int:
        if index >= len(self.registers):
            raise RegisterError(f'Register ${index} outside of {len(self.registers)} registers')

        return index

    def get(self, index: int) -> int:
        return self.registers[self.slot(index)]

    def set(self, index: int, value: int):
        self.registers[self.slot(index)] = value & REGISTER_MASK

    def dump(self, fmt: TextFormat = TextFormat.DECIMAL) -> str:
        def render(value: int) -> str:
            if fmt is TextFormat.DECIMAL:
                return str(value)

            return fmt.hex_digits(value, 2)

        return ' '.join(f'{i}:{render(v)}' for i, v in enumerate(self.registers))

    def debug_dump(self):
        lg.debug(self.dump(TextFormat.UPPER_HEX))

    # - Operations - #

    def run_load(self, load: Load):
        self.set(int(load.register), int(load.value))

    def run_add(self, add: Add):
        a = self.get(int(add.source1))
        b = self.get(int(add.source2))
        self.set(int(add.dest), a + b)

    HANDLERS = {
        Load: run_load,
        Add: run_add,
    }

    # -- Implementation -- #

    def execute(self, instruction: Instruction):
        handler = self.HANDLERS.get(type(instruction))

        if handler is None:
            raise UnsupportedInstruction(f'No handler for {instruction.MNEMONIC}')

        lg.debug(f'Executing {instruction}')
        handler(self, instruction)

    def run(self, instructions: Iterable[Instruction]):
        for instruction in instructions:
            self.execute(instruction)

        self.debug_dump()
