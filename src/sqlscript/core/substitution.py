"""
Substitution Engine

Replaces substitution variable references in finished statement text.

A reference is ``[escaper]<prefix><identifier><delimiter>`` where the
delimiter is a quote, whitespace, the end of the text or the configured
substitution terminator. With the default options::

    &name      -> value of name
    &name.sfx  -> value of name immediately followed by "sfx"
    \\&name     -> copied unchanged, escaper included

References are matched left to right without overlapping, and the variable
name is looked up with its exact case.
"""

import logging
import re

from sqlscript.core.options import ScriptOptions
from sqlscript.core.variables import VariableTable

logger = logging.getLogger(__name__)

IDENTIFIER = r"[a-zA-Z0-9_]+"


def reference_pattern(options: ScriptOptions) -> re.Pattern[str]:
    """Build the reference pattern for the current delimiter options."""
    escaper = re.escape(options.escaper)
    prefix = re.escape(options.substitution_prefix)
    terminator = re.escape(options.substitution_terminator)
    return re.compile(
        rf"(?P<escape>{escaper})?"
        rf"(?P<reference>{prefix}(?P<name>{IDENTIFIER}))"
        rf"(?P<delimiter>'|\"|\s|$|{terminator})",
        re.IGNORECASE,
    )


class SubstitutionEngine:
    """Rewrites statement text using a VariableTable."""

    def __init__(self, options: ScriptOptions, variables: VariableTable) -> None:
        self.options = options
        self.variables = variables

    def substitute(self, text: str) -> str:
        pattern = reference_pattern(self.options)
        logger.debug("Substitution pattern: %s", pattern.pattern)
        return pattern.sub(self._replace, text)

    def _replace(self, match: re.Match[str]) -> str:
        if match.group("escape") is not None:
            return match.group(0)

        name = match.group("name")
        value = self.variables.get(name)
        if value is None:
            logger.warning(
                "The substitution variable %s%s is not defined.",
                self.options.substitution_prefix,
                name,
            )
            value = ""

        delimiter = match.group("delimiter")
        if delimiter == self.options.substitution_terminator:
            delimiter = ""
        return value + delimiter
