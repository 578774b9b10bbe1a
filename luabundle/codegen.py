"""
Code generator: writes the bundle text for an EmissionPlan.

Layout of a bundle:

    -- header
    <runtime preamble>
    __luapack_define({ "a.b", "a/b" }, function(...)
    <source of a/b.lua>
    end)
    ...
    require("a.b")          -- one per module, in plan order
    <entry file source>

Module bodies are wrapped as vararg functions so code that reads '...' at
chunk level (the module name in plain Lua) still compiles. Every module is
loaded before the entry's own code runs, dependencies first.
"""
import os

from .runtime import get_preamble
from .scanner import strip_shebang

RUNTIME_PREAMBLE = get_preamble()

_LUA_ESCAPES = {'\\': '\\\\', '"': '\\"', '\n': '\\n', '\r': '\\r', '\t': '\\t'}


def lua_quote(value):
    """Render a Python string as a double-quoted Lua literal."""
    out = []
    for char in value:
        if char in _LUA_ESCAPES:
            out.append(_LUA_ESCAPES[char])
        elif ord(char) < 32 or ord(char) == 127:
            out.append(f"\\{ord(char):03d}")
        else:
            out.append(char)
    return '"' + ''.join(out) + '"'


def lua_name_list(names):
    if not names:
        return "{}"
    return "{ " + ", ".join(lua_quote(name) for name in names) + " }"


def display_path(path, base_dir):
    """Path relative to the entry directory, with '/' separators."""
    try:
        relative = os.path.relpath(path, base_dir)
    except ValueError:  # different drive on Windows
        relative = path
    return relative.replace(os.sep, '/')


def _ensure_newline(text):
    return text if text.endswith('\n') else text + '\n'


def module_definition(node, base_dir):
    names = lua_name_list(node.aliases)
    label = ", ".join(lua_quote(alias) for alias in node.aliases) or "(no alias)"
    body = _ensure_newline(strip_shebang(node.source))
    return (f"-- module: {label} ({display_path(node.path, base_dir)})\n"
            f"__luapack_define({names}, function(...)\n"
            f"{body}"
            f"end)\n")


def generate_bundle(plan):
    """
    Emit the bundle for a validated plan.

    Output depends only on the plan's order and the file contents, so the same
    tree always yields byte-identical text.
    """
    entry = plan.entry
    base_dir = os.path.dirname(entry.path)
    entry_name = display_path(entry.path, base_dir)
    modules = plan.modules()

    parts = []
    entry_source = entry.source
    if entry_source.startswith('#'):
        # Lua only skips a shebang on the first line of a chunk
        first_line, _, _ = entry_source.partition('\n')
        parts.append(first_line + '\n')
        entry_source = strip_shebang(entry_source)

    parts.append(f"-- Bundled by luapack from {entry_name} "
                 f"({len(modules)} module{'s' if len(modules) != 1 else ''}). Do not edit.\n")
    parts.append(RUNTIME_PREAMBLE + "\n")

    for node in modules:
        parts.append("\n" + module_definition(node, base_dir))

    # A module that requires the entry back gets the entry's placeholder.
    preload = []
    if entry.aliases:
        preload.append(f"__luapack_enter({lua_name_list(entry.aliases)})\n")
    for node in modules:
        preload.append(f"require({lua_quote(node.aliases[0])})\n")
    if preload:
        parts.append("\n-- load order\n" + "".join(preload))

    parts.append(f"\n-- entry: {entry_name}\n")
    parts.append(entry_source)

    return "".join(parts)
