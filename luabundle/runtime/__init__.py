# luapack Runtime Components
"""
Lua runtime that gets injected at the top of every bundle.

The runtime lives in real .lua files so it can be read and linted as Lua,
and is concatenated into a single preamble string at bundle time.
"""

import os


def get_preamble():
    """
    Read and concatenate the runtime Lua files into a single preamble string.

    The preamble defines a chunk-local module registry and a replacement
    require(), so the bundle needs no filesystem or package searchers.
    """
    runtime_dir = os.path.dirname(__file__)

    # Order matters - later files may use locals from earlier ones
    modules = [
        'preamble.lua',  # registry, __luapack_define, __luapack_enter, require
    ]

    parts = []
    for module in modules:
        path = os.path.join(runtime_dir, module)
        with open(path, 'r', encoding='utf-8') as f:
            parts.append(f.read().rstrip('\n'))

    return '\n\n'.join(parts)
