"""
Unit tests for the require scanner.
"""
from luabundle.models import DynamicRequireWarning
from luabundle.scanner import literal_value, scan_requires, strip_shebang, tokenize


def targets(text):
    return [ref.target for ref in scan_requires(text, "/p/main.lua").refs]


class TestLiteralRequires:
    """Tests for recognizing literal require call sites."""

    def test_double_and_single_quotes(self):
        code = 'local a = require("alpha")\nlocal b = require(\'beta\')\n'
        assert targets(code) == ["alpha", "beta"]

    def test_first_appearance_order_with_duplicates(self):
        """Duplicates are kept; the graph builder deduplicates."""
        code = 'require("b")\nrequire("a")\nrequire("b")\n'
        assert targets(code) == ["b", "a", "b"]

    def test_dotted_and_slash_names_kept_as_written(self):
        code = 'require("lib.util")\nrequire("lib/util")'
        assert targets(code) == ["lib.util", "lib/util"]

    def test_whitespace_inside_call(self):
        code = 'local x = require (  "spaced"  )'
        assert targets(code) == ["spaced"]

    def test_parenless_call_forms(self):
        code = 'local a = require "one"\nlocal b = require \'two\'\nlocal c = require [[three]]'
        assert targets(code) == ["one", "two", "three"]

    def test_long_bracket_argument(self):
        code = 'local m = require([==[deep.mod]==])'
        assert targets(code) == ["deep.mod"]

    def test_escape_sequences_are_decoded(self):
        code = r'local m = require("odd\"name")'
        assert targets(code) == ['odd"name']

    def test_ref_records_file_and_line(self):
        code = '\n\nlocal m = require("mod")'
        ref = scan_requires(code, "/p/main.lua").refs[0]
        assert ref.requiring_file == "/p/main.lua"
        assert ref.line == 3


class TestIgnoredOccurrences:
    """require text that is not a global require call."""

    def test_line_comment(self):
        assert targets('-- local x = require("commented")\nprint(1)') == []

    def test_block_comment(self):
        code = '--[[\nlocal x = require("inside")\n]]\nlocal y = require("outside")'
        assert targets(code) == ["outside"]

    def test_leveled_block_comment(self):
        code = '--[==[ require("a") ]] still comment ]==]\nrequire("b")'
        assert targets(code) == ["b"]

    def test_deeply_leveled_block_comment(self):
        code = '--[====[\nlocal x = require("ghost")\n]==] ]====]\nrequire("real")'
        assert targets(code) == ["real"]

    def test_deeply_leveled_long_string(self):
        code = 'local s = [=====[ require("ghost") ]] ]=====]\nrequire("real")'
        assert targets(code) == ["real"]

    def test_string_contents(self):
        code = 'local s = "require(\'nope\')"\nlocal t = [[require("nope2")]]'
        assert targets(code) == []

    def test_method_and_field_calls(self):
        code = 'loader.require("x")\nobj:require("y")\nrequire("z")'
        assert targets(code) == ["z"]

    def test_local_function_named_require(self):
        code = 'local function require(name) return name end'
        result = scan_requires(code, "/p/main.lua")
        assert result.refs == []
        assert result.warnings == []

    def test_bare_reference_is_not_a_call(self):
        result = scan_requires('local req = require\nreturn req', "/p/main.lua")
        assert result.refs == []
        assert result.warnings == []

    def test_similar_identifiers(self):
        assert targets('required("a")\nmy_require("b")') == []


class TestDynamicRequires:
    """Non-literal arguments become warnings, never guesses."""

    def test_variable_argument(self):
        code = 'local name = "b"\nlocal m = require(name)\n'
        result = scan_requires(code, "/p/main.lua")
        assert result.refs == []
        assert len(result.warnings) == 1
        warning = result.warnings[0]
        assert isinstance(warning, DynamicRequireWarning)
        assert warning.file == "/p/main.lua"
        assert warning.line == 2
        assert warning.expression == "name"

    def test_concatenation(self):
        result = scan_requires('require("mods." .. kind)', "/p/main.lua")
        assert result.refs == []
        assert result.warnings[0].expression == '"mods." .. kind'

    def test_function_call_argument(self):
        result = scan_requires('require(pick("a", "b"))', "/p/main.lua")
        assert result.refs == []
        assert result.warnings[0].expression == 'pick("a", "b")'

    def test_dynamic_and_literal_mixed(self):
        result = scan_requires('require(x)\nrequire("ok")', "/p/main.lua")
        assert [ref.target for ref in result.refs] == ["ok"]
        assert len(result.warnings) == 1

    def test_warning_text_names_location(self):
        result = scan_requires('require(x)', "/p/main.lua")
        assert str(result.warnings[0]) == "/p/main.lua:1: cannot bundle dynamic require(x)"


class TestLexing:
    """Tests for the token layer the scanner relies on."""

    def test_shebang_is_blanked(self):
        assert strip_shebang("#!/usr/bin/lua\nprint(1)") == "\nprint(1)"
        assert strip_shebang("print(1)") == "print(1)"

    def test_shebang_file_scans(self):
        assert targets('#!/usr/bin/env lua\nrequire("a")') == ["a"]

    def test_unknown_characters_do_not_fail(self):
        assert targets('local s = "unterminated\nrequire("a") -- ok\n@ $ ?') == ["a"]

    def test_long_string_drops_leading_newline(self):
        token = [t for t in tokenize('x = [[\nabc]]') if t.type == 'LONG_STRING'][0]
        assert literal_value(token) == "abc"

    def test_high_level_long_bracket_argument(self):
        assert targets('require [======[six.deep]======]') == ["six.deep"]

    def test_numeric_escapes(self):
        token = [t for t in tokenize(r'x = "\65\x42\u{43}"') if t.type == 'STRING'][0]
        assert literal_value(token) == "ABC"
