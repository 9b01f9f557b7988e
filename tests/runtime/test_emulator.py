from click.testing import CliRunner

import lvm.runtime.emulator as emulator

import unit_utils


def run(*args: str):
    return CliRunner().invoke(emulator.run, list(args))


def test_run_binary():
    result = run(str(unit_utils.find_file('testdata/programs/sum.bin')))

    assert result.exit_code == emulator.EXIT_OK
    assert result.stdout == '$1 = 200\n$2 = 300\n$10 = 500\n'


def test_run_text_in_hex():
    path = unit_utils.find_file('testdata/programs/sum.lasm')
    result = run('--form', 'dec', '--hex', str(path))

    assert result.exit_code == emulator.EXIT_OK
    assert result.stdout == '$1 = 00C8\n$2 = 012C\n$10 = 01F4\n'


def test_run_hex_text():
    path = unit_utils.find_file('testdata/programs/sum.hlasm')
    result = run('--form', 'hex', str(path))

    assert result.exit_code == emulator.EXIT_OK
    assert '$10 = 500' in result.stdout


def test_decode_error():
    result = run(str(unit_utils.find_file('testdata/programs/truncated.bin')))
    assert result.exit_code == emulator.EXIT_DECODE_ERROR


def test_execution_error():
    path = unit_utils.find_file('testdata/programs/badreg.lasm')
    result = run('--form', 'dec', str(path))
    assert result.exit_code == emulator.EXIT_EXEC_ERROR


def test_load_program():
    program = emulator.load_program(b'LOAD $1 #2\n', 'dec')
    machine = emulator.execute(program)
    assert machine.registers[1] == 2
