"""
Lua token grammar.

This is a Lark grammar for the lexical layer of Lua only. The bundler never
parses Lua; it lexes it so that require() calls can be told apart from the
same characters inside comments and string literals.
"""

lua_token_grammar = r"""
    start: token*
    token: NAME | STRING | LONG_STRING | NUMBER | OP | OTHER

    // --- Comments (long form first, then to end of line) ---
    COMMENT: /--\[(?P<comment_eq>=*)\[[\s\S]*?\](?P=comment_eq)\]/
           | /--[^\n]*/

    // --- Literals ---
    LONG_STRING: /\[(?P<string_eq>=*)\[[\s\S]*?\](?P=string_eq)\]/
    STRING: /"(?:[^"\\\n]|\\[\s\S])*"/
          | /'(?:[^'\\\n]|\\[\s\S])*'/
    NUMBER: /0[xX][0-9a-fA-F]*(?:\.[0-9a-fA-F]*)?(?:[pP][+-]?[0-9]+)?/
          | /[0-9]+(?:\.[0-9]*)?(?:[eE][+-]?[0-9]+)?/
          | /\.[0-9]+(?:[eE][+-]?[0-9]+)?/

    NAME: /[A-Za-z_][A-Za-z0-9_]*/

    // --- Punctuation ---
    OP: /\.\.\.|\.\.|==|~=|<=|>=|<<|>>|\/\/|::|[-+*\/%^#&~|<>=(){}\[\];:,.]/

    // Anything else (stray bytes, unterminated quotes, non-ASCII) is kept as a
    // single character so lexing never fails on code we do not understand.
    OTHER: /[^\s]/

    WS: /\s+/
    %ignore WS
    %ignore COMMENT
"""
