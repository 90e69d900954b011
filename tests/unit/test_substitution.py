"""
Unit tests for sqlscript.core.substitution.
"""

import logging

import pytest

from sqlscript.core.options import ScriptOptions
from sqlscript.core.substitution import SubstitutionEngine
from sqlscript.core.variables import VariableTable


@pytest.fixture
def variables() -> VariableTable:
    table = VariableTable()
    table.set("a", "hello")
    table.set("schema", "app")
    table.set("Mixed", "upper")
    return table


@pytest.fixture
def options() -> ScriptOptions:
    return ScriptOptions()


@pytest.fixture
def engine(options, variables) -> SubstitutionEngine:
    return SubstitutionEngine(options, variables)


class TestSubstitute:
    def test_text_without_references_is_unchanged(self, engine) -> None:
        assert engine.substitute("SELECT 1 FROM dual") == "SELECT 1 FROM dual"

    def test_terminator_is_consumed(self, engine) -> None:
        assert engine.substitute("SELECT '&a.' FROM dual") == "SELECT 'hello' FROM dual"

    def test_terminator_concatenates(self, engine) -> None:
        assert engine.substitute("SELECT * FROM &schema..users") == "SELECT * FROM app.users"
        assert engine.substitute("&a.world") == "helloworld"

    def test_quote_and_whitespace_delimiters_are_kept(self, engine) -> None:
        assert engine.substitute("'&a'") == "'hello'"
        assert engine.substitute('"&a"') == '"hello"'
        assert engine.substitute("&a b") == "hello b"
        assert engine.substitute("x = &a\nAND y") == "x = hello\nAND y"

    def test_reference_at_end_of_text(self, engine) -> None:
        assert engine.substitute("WHERE name = &a") == "WHERE name = hello"

    def test_reference_needs_a_delimiter(self, engine) -> None:
        assert engine.substitute("f(&a)") == "f(&a)"

    def test_multiple_references(self, engine) -> None:
        assert engine.substitute("&a &schema. &a") == "hello app hello"

    def test_escaped_reference_is_copied_with_escaper(self, engine) -> None:
        assert engine.substitute("SELECT '\\&a' FROM t") == "SELECT '\\&a' FROM t"
        assert engine.substitute("\\&a.x") == "\\&a.x"

    def test_lookup_is_case_sensitive(self, engine) -> None:
        assert engine.substitute("&Mixed ") == "upper "
        assert engine.substitute("&mixed ") == " "

    def test_undefined_variable_warns_and_substitutes_empty(self, engine, caplog) -> None:
        with caplog.at_level(logging.WARNING):
            result = engine.substitute("SELECT '&missing.' FROM t")

        assert result == "SELECT '' FROM t"
        assert "&missing is not defined" in caplog.text

    def test_defined_empty_value_does_not_warn(self, engine, variables, caplog) -> None:
        variables.set("blank", "")
        with caplog.at_level(logging.WARNING):
            assert engine.substitute("x&blank.y") == "xy"
        assert caplog.text == ""

    def test_positional_arguments(self, engine, variables) -> None:
        variables.bind_arguments(["x", "y"])
        assert engine.substitute("SELECT '&1', '&2' FROM t") == "SELECT 'x', 'y' FROM t"

    def test_custom_delimiters(self, engine, options) -> None:
        options.substitution_prefix = "$"
        options.substitution_terminator = "|"
        options.escaper = "!"
        assert engine.substitute("$a|s $a &a !$a ") == "hellos hello &a !$a "

    def test_prefix_match_is_case_insensitive(self, engine, options) -> None:
        options.substitution_prefix = "v:"
        assert engine.substitute("V:a v:a") == "hello hello"
