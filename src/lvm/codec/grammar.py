''' Shared text grammar '''

from functools import cache
from typing import Set, Tuple

import pyparsing as pp

from lvm.common.formats import Radix
import lvm.common.errors as err


# Whitespace is significant: every element below matches exactly where it is applied
space = pp.White(' \t\r\n').leave_whitespace()
line_break = pp.Regex(r'[ \t\r]*\n\s*').leave_whitespace()

identifier_chars = pp.alphanums + '_'


def separator(strict: bool) -> pp.ParserElement:
    return line_break if strict else space


@cache
def mnemonic(name: str) -> pp.ParserElement:
    # '$' is an operand prefix, so it must terminate the keyword
    return pp.Keyword(name, ident_chars=identifier_chars).leave_whitespace()


@cache
def prefixed_number(prefix: str, radix: Radix) -> pp.ParserElement:
    ''' <prefix><digits>, prefix optional for hexadecimal input

    The digit run is left as text: the caller bounds its length before
    converting it.
    '''
    marker: pp.ParserElement = pp.Literal(prefix)

    if radix is Radix.HEXADECIMAL:
        marker = pp.Optional(marker)

    return (pp.Suppress(marker) + pp.Word(radix.digits)).leave_whitespace()


identifier = pp.Word(identifier_chars).leave_whitespace()
word = pp.Word(pp.printables).leave_whitespace()

# Registered mnemonics; a bare hex run spelling one of them is not an operand
reserved: Set[str] = set()


def reserve(name: str):
    reserved.add(name)


@cache
def _anchored(element: pp.ParserElement) -> pp.ParserElement:
    return pp.Located(element).leave_whitespace().parse_with_tabs()


def scan(element: pp.ParserElement, text: str) -> Tuple[str, pp.ParseResults]:
    ''' Matches `element` at the very start of `text`.

    Returns the unconsumed remainder together with the parsed tokens;
    raises pp.ParseException when the element does not match.
    '''
    _, tokens, end = _anchored(element).parse_string(text)
    return text[end:], tokens


def expect(element: pp.ParserElement, text: str, what: str) -> str:
    ''' Consumes `element` or fails with MalformedOperand '''
    try:
        rest, _ = scan(element, text)
    except pp.ParseException:
        raise err.MalformedOperand(f'expected {what}, found {leading_word(text)}', text)

    return rest


def first_word(text: str) -> str:
    try:
        _, tokens = scan(word, text)
    except pp.ParseException:
        return text[:1]

    return tokens[0]


def leading_word(text: str) -> str:
    ''' First token of `text` for diagnostics '''
    if not text:
        return 'end of input'

    return repr(first_word(text))


def is_blank(text: str) -> bool:
    return not text or text.isspace()
