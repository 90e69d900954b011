"""
Script Options

Delimiter settings that drive line classification and variable substitution.
Every setting can be changed at runtime with a ``SET <option> [value]``
directive; omitting the value restores the default.
"""

import logging
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from sqlscript.domain.errors import ConfigurationError

logger = logging.getLogger(__name__)


class Option(Enum):
    """SET option names, the ScriptOptions field they drive and their default."""

    SQLTERMINATOR = ("sql_terminator", ";")
    BLOCKTERMINATOR = ("block_terminator", ".")
    DEFINE = ("substitution_prefix", "&")
    CONCAT = ("substitution_terminator", ".")
    ESCAPE = ("escaper", "\\")

    def __init__(self, field_name: str, default: str) -> None:
        self.field_name = field_name
        self.default = default

    @classmethod
    def from_name(cls, name: str) -> "Option":
        """Resolve a SET option name, ignoring case.

        Raises:
            ConfigurationError: If the name is not a known option
        """
        try:
            return cls[name.upper()]
        except KeyError:
            known = ", ".join(option.name for option in cls)
            raise ConfigurationError(
                f"Unknown SET option '{name}' (expected one of: {known})"
            ) from None


class ScriptOptions(BaseModel):
    """Mutable delimiter configuration for one interpreter run

    Attributes:
        sql_terminator: Character ending a plain SQL statement
        block_terminator: Line closing a procedural block (``/`` always works too)
        substitution_prefix: Marker introducing a substitution variable
        substitution_terminator: Optional delimiter consumed after a variable name
        escaper: Marker that disables substitution of the following reference
    """

    model_config = ConfigDict(validate_assignment=True)

    sql_terminator: str = Field(default=Option.SQLTERMINATOR.default, min_length=1)
    block_terminator: str = Field(default=Option.BLOCKTERMINATOR.default, min_length=1)
    substitution_prefix: str = Field(default=Option.DEFINE.default, min_length=1)
    substitution_terminator: str = Field(default=Option.CONCAT.default, min_length=1)
    escaper: str = Field(default=Option.ESCAPE.default, min_length=1)

    def apply(self, option: Option, value: str | None = None) -> None:
        """Set an option, or reset it to its default when no value is given."""
        new_value = value if value is not None else option.default
        logger.debug(
            "Changing %s from %r to %r",
            option.name,
            self.get(option),
            new_value,
        )
        setattr(self, option.field_name, new_value)

    def get(self, option: Option) -> str:
        return getattr(self, option.field_name)
