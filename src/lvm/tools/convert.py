import sys
from pathlib import Path
import logging as lg

import click

from lvm.common.formats import Radix, TextFormat
from lvm.codec.program import Program
import lvm.common.errors as err


EXIT_OK = 0
EXIT_DECODE_ERROR = 1

INPUT_FORMS = ['dec', 'hex', 'bin']
OUTPUT_FORMS = ['dec', 'hex', 'HEX', 'bin']


def read_source(source: str) -> bytes:
    if source == '-':
        return click.get_binary_stream('stdin').read()

    return Path(source).read_bytes()


def write_target(target: str, contents: bytes):
    if target == '-':
        stream = click.get_binary_stream('stdout')
        stream.write(contents)
        stream.flush()
        return

    path = Path(target)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(contents)


def decode(source: bytes, form: str, strict: bool = False) -> Program:
    if form == 'bin':
        return Program.decode_bytes(source)

    radix = Radix.HEXADECIMAL if form == 'hex' else Radix.DECIMAL
    return Program.decode_text(source.decode('utf-8'), radix, strict)


def encode(program: Program, form: str) -> bytes:
    if form == 'bin':
        return program.to_bytes()

    text = program.to_text(TextFormat(form))
    return (text + '\n').encode('utf-8') if text else b''


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('--from', 'source_form', type=click.Choice(INPUT_FORMS), default='dec',
              help='Representation of the source')
@click.option('--to', 'target_form', type=click.Choice(OUTPUT_FORMS), default='bin',
              help='Representation of the target')
@click.option('--strict', is_flag=True, help='One instruction per line')
@click.argument('source', type=str)
@click.argument('target', type=str)
def convert(verbose: bool, source_form: str, target_form: str, strict: bool, source: str, target: str):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.debug(f'Converting {source} ({source_form}) to {target} ({target_form})')

    try:
        program = decode(read_source(source), source_form, strict)
    except (err.CodecError, UnicodeDecodeError) as e:
        lg.error(f'Unable to decode {source}: {e}')
        sys.exit(EXIT_DECODE_ERROR)

    write_target(target, encode(program, target_form))
    lg.debug(f'Wrote {len(program)} instructions')
    sys.exit(EXIT_OK)


if __name__ == '__main__':
    convert()
