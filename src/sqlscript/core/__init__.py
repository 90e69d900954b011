"""
Core Interpreter

Provider-agnostic script preprocessing:
- Options: delimiter configuration changed by SET
- Variables: substitution variables set by DEFINE and script arguments
- Classifier: ordered line classification
- Substitution: variable reference rewriting
- Includes: @@/@/START resolution against the directory stack
- Interpreter: the driver tying them together
"""

from .classifier import LineCategory, ParserState, classify_line
from .directories import DirectoryStack
from .includes import IncludeResolver
from .interpreter import ScriptInterpreter, ScriptSession, StatementBuffer
from .options import Option, ScriptOptions
from .substitution import SubstitutionEngine
from .variables import VariableTable

__all__ = [
    "LineCategory",
    "ParserState",
    "classify_line",
    "DirectoryStack",
    "IncludeResolver",
    "ScriptInterpreter",
    "ScriptSession",
    "StatementBuffer",
    "Option",
    "ScriptOptions",
    "SubstitutionEngine",
    "VariableTable",
]
