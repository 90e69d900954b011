"""Parsing of the SET and DEFINE directive lines."""

import re
from dataclasses import dataclass

from sqlscript.core.options import Option
from sqlscript.domain.errors import ConfigurationError

_SET = re.compile(r"^SET\s+(?P<name>\S+)(\s+(?P<value>\S+))?$", re.IGNORECASE)
_DEFINE = re.compile(
    r"^DEFINE(\s+(?P<name>[a-zA-Z0-9_]+)(\s*=\s*(?P<value>.+))?)?$",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class SetDirective:
    option: Option
    value: str | None = None


@dataclass(frozen=True)
class DefineDirective:
    """A DEFINE line; no name lists every variable, no value prints one."""

    name: str | None = None
    value: str | None = None


def parse_set(line: str) -> SetDirective:
    """Parse ``SET <option> [value]``.

    Raises:
        ConfigurationError: If the line is malformed or names an unknown option
    """
    match = _SET.match(line)
    if match is None:
        raise ConfigurationError(f"Malformed SET directive: {line}")
    return SetDirective(Option.from_name(match.group("name")), match.group("value"))


def parse_define(line: str) -> DefineDirective:
    """Parse ``DEFINE``, ``DEFINE <name>`` or ``DEFINE <name> = <value>``.

    The value is returned raw; substitution happens in the interpreter.

    Raises:
        ConfigurationError: If the line matches none of the forms
    """
    match = _DEFINE.match(line)
    if match is None:
        raise ConfigurationError(f"Malformed DEFINE directive: {line}")
    return DefineDirective(match.group("name"), match.group("value"))
