import pytest

import lvm.common.errors as err


def test_context_builds_path_outermost_first():
    with pytest.raises(err.MalformedOperand) as e:
        with err.context('program'):
            with err.context('instruction'):
                with err.context('register'):
                    raise err.MalformedOperand('expected digits', '$x')

    assert e.value.context == ['program', 'instruction', 'register']
    assert e.value.path == 'program -> instruction -> register'
    assert e.value.remaining == '$x'
    assert str(e.value) == 'program -> instruction -> register: malformed operand (expected digits)'


def test_context_ignores_foreign_errors():
    with pytest.raises(KeyError):
        with err.context('program'):
            raise KeyError('x')


def test_message_without_context_or_detail():
    assert str(err.UnexpectedEndOfInput()) == 'unexpected end of input'
    assert str(err.TrailingInput('3 bytes')) == 'trailing input (3 bytes)'


def test_typed_details():
    unknown = err.UnknownOpcode(0x0F)
    assert unknown.opcode == 0x0F
    assert str(unknown) == 'unknown opcode (0x0F)'

    mnemonic = err.UnknownMnemonic('JMP')
    assert mnemonic.word == 'JMP'

    out_of_range = err.ValueOutOfRange(300, 255)
    assert (out_of_range.value, out_of_range.limit) == (300, 255)


def test_taxonomy():
    for kind in [
        err.UnknownMnemonic,
        err.UnknownOpcode,
        err.Mismatch,
        err.MalformedOperand,
        err.ValueOutOfRange,
        err.UnexpectedEndOfInput,
        err.TrailingInput
    ]:
        assert issubclass(kind, err.CodecError)
