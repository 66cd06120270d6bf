"""Shared models and enums used across dbdump modules."""

from enum import Enum


class ObjectKind(str, Enum):
    """Kind of schema object exported by dbdump."""

    TABLE = "table"
    VIEW = "view"
    PROCEDURE = "procedure"
    FUNCTION = "function"
    TRIGGER = "trigger"


class LogLevel(str, Enum):
    """Verbosity of the diagnostic stream."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class OrderingStrategy(str, Enum):
    """Algorithm used to order objects by their dependencies."""

    REPOSITION = "reposition"
    TOPOLOGICAL = "topological"


class ReferenceStrategy(str, Enum):
    """How view definitions are scanned for references to other objects."""

    PATTERN = "pattern"
    PARSE = "parse"
