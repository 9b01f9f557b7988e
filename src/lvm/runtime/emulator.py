import sys
from pathlib import Path
import logging as lg

import click

from lvm.common.formats import Radix, TextFormat
from lvm.codec.program import Program
import lvm.common.errors as err
import lvm.runtime.vm as vm


EXIT_OK = 0
EXIT_DECODE_ERROR = 1
EXIT_EXEC_ERROR = 2

FORMS = ['dec', 'hex', 'bin']


def load_program(source: bytes, form: str) -> Program:
    if form == 'bin':
        return Program.decode_bytes(source)

    radix = Radix.HEXADECIMAL if form == 'hex' else Radix.DECIMAL
    return Program.decode_text(source.decode('utf-8'), radix)


def execute(program: Program) -> vm.VM:
    machine = vm.VM()
    machine.run(program)
    return machine


def report(machine: vm.VM, fmt: TextFormat) -> str:
    ''' Non-zero registers, one per line '''
    lines = []

    for index, value in enumerate(machine.registers):
        if value:
            shown = str(value) if fmt is TextFormat.DECIMAL else fmt.hex_digits(value, 2)
            lines.append(f'${index} = {shown}')

    return '\n'.join(lines)


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('--form', type=click.Choice(FORMS), default='bin', help='Program representation')
@click.option('--hex', 'as_hex', is_flag=True, help='Print registers in hex')
@click.argument('program_filename', type=Path)
def run(verbose: bool, form: str, as_hex: bool, program_filename: Path):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info('LVM')

    try:
        program = load_program(program_filename.read_bytes(), form)
        lg.info(f'Loaded {len(program)} instructions from {program_filename}')
    except err.CodecError as e:
        lg.error(f'Unable to decode {program_filename}: {e}')
        sys.exit(EXIT_DECODE_ERROR)
    except UnicodeDecodeError as e:
        lg.error(f'Unable to read {program_filename} as text: {e}')
        sys.exit(EXIT_DECODE_ERROR)

    try:
        machine = execute(program)
    except vm.ExecutionError as e:
        lg.error(f'Execution halted on error: {e}')
        sys.exit(EXIT_EXEC_ERROR)

    click.echo(report(machine, TextFormat.UPPER_HEX if as_hex else TextFormat.DECIMAL))
    sys.exit(EXIT_OK)


if __name__ == '__main__':
    run()
