"""
Require scanner.

Finds literal require("name") call sites in one Lua file. Only literals are
followed; anything computed at run time is reported as a warning instead of
being guessed.
"""
import re
from typing import List, NamedTuple

from lark import Lark

from .grammar import lua_token_grammar
from .models import DynamicRequireWarning, ModuleRef

_LEXER = Lark(lua_token_grammar, parser='lalr', lexer='basic')

LITERAL_TYPES = ('STRING', 'LONG_STRING')

_ESCAPES = {
    'a': '\a', 'b': '\b', 'f': '\f', 'n': '\n', 'r': '\r', 't': '\t', 'v': '\v',
    '\\': '\\', '"': '"', "'": "'", '\n': '\n',
}
_ESCAPE_RE = re.compile(r'\\(x[0-9a-fA-F]{2}|u\{[0-9a-fA-F]+\}|[0-9]{1,3}|z\s*|[\s\S])')
_LONG_OPEN_RE = re.compile(r'^\[=*\[')


class ScanResult(NamedTuple):
    refs: List[ModuleRef]
    warnings: List[DynamicRequireWarning]


def strip_shebang(text):
    """Blank out a leading '#!' line, keeping line numbers stable."""
    if text.startswith('#'):
        newline = text.find('\n')
        return '' if newline < 0 else text[newline:]
    return text


def _unescape(match):
    seq = match.group(1)
    if seq[0] == 'x':
        return chr(int(seq[1:], 16))
    if seq[0] == 'u':
        return chr(int(seq[2:-1], 16))
    if seq[0].isdigit():
        return chr(int(seq))
    if seq[0] == 'z':
        return ''
    return _ESCAPES.get(seq, seq)


def literal_value(token):
    """Decode a STRING or LONG_STRING token into the Lua string it denotes."""
    raw = str(token)
    if token.type == 'LONG_STRING':
        opener = _LONG_OPEN_RE.match(raw).group(0)
        body = raw[len(opener):-len(opener)]
        # Lua drops a newline that directly follows the opening bracket
        if body.startswith('\r\n'):
            body = body[2:]
        elif body.startswith('\n'):
            body = body[1:]
        return body
    return _ESCAPE_RE.sub(_unescape, raw[1:-1])


def tokenize(text):
    return list(_LEXER.lex(strip_shebang(text)))


def _call_extent(tokens, open_index):
    """Index of the ')' closing the '(' at open_index, or None if unbalanced."""
    depth = 0
    for index in range(open_index, len(tokens)):
        tok = tokens[index]
        if tok.type != 'OP':
            continue
        if tok.value == '(':
            depth += 1
        elif tok.value == ')':
            depth -= 1
            if depth == 0:
                return index
    return None


def _is_global_require(tokens, index):
    tok = tokens[index]
    if tok.type != 'NAME' or tok.value != 'require':
        return False
    if index > 0:
        prev = tokens[index - 1]
        # obj.require / obj:require / function require
        if prev.type == 'OP' and prev.value in ('.', ':'):
            return False
        if prev.type == 'NAME' and prev.value == 'function':
            return False
    return True


def scan_requires(text, requiring_file):
    """
    Extract require targets from Lua source.

    Args:
        text: Raw file content
        requiring_file: Canonical path of the file, recorded on each ref

    Returns:
        ScanResult with refs in first-appearance order (duplicates kept)
        and one DynamicRequireWarning per non-literal call site.
    """
    tokens = tokenize(text)
    refs = []
    warnings = []

    for index in range(len(tokens)):
        if not _is_global_require(tokens, index):
            continue
        if index + 1 >= len(tokens):
            break
        nxt = tokens[index + 1]

        # require "name" / require [[name]]
        if nxt.type in LITERAL_TYPES:
            refs.append(ModuleRef(target=literal_value(nxt), requiring_file=requiring_file,
                                  line=tokens[index].line))
            continue

        if nxt.type != 'OP' or nxt.value != '(':
            continue  # bare reference, e.g. local req = require

        close = _call_extent(tokens, index + 1)
        if close == index + 3 and tokens[index + 2].type in LITERAL_TYPES:
            refs.append(ModuleRef(target=literal_value(tokens[index + 2]),
                                  requiring_file=requiring_file, line=tokens[index].line))
            continue

        if close is None:
            args = tokens[index + 2:]
            expression = ' '.join(str(t) for t in args if t.line == nxt.line)
        else:
            args = tokens[index + 2:close]
            expression = text_between(text, args)
        warnings.append(DynamicRequireWarning(file=requiring_file, line=tokens[index].line,
                                              expression=expression))

    return ScanResult(refs, warnings)


def text_between(text, tokens):
    """Original source text spanned by a run of tokens."""
    if not tokens:
        return ''
    source = strip_shebang(text)
    return source[tokens[0].start_pos:tokens[-1].end_pos]
