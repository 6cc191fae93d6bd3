"""Level table and its mapping to the stdlib ``logging`` severity scale."""

from enum import IntEnum

from taglog.core.exceptions import InvalidLevel


class Level(IntEnum):
    """Log levels, ordered by severity. The integer value is the rank."""

    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4
    FATAL = 5

    @property
    def char(self) -> str:
        """Single upper-case letter used in rendered lines."""
        return self.name[0]

    @property
    def label(self) -> str:
        return self.name.lower()


LEVELS: tuple[Level, ...] = tuple(Level)

# Python logging numeric levels; TRACE sits below DEBUG as is customary.
_EXTERNAL_VALUES: dict[Level, int] = {
    Level.TRACE: 5,
    Level.DEBUG: 10,
    Level.INFO: 20,
    Level.WARN: 30,
    Level.ERROR: 40,
    Level.FATAL: 50,
}

_ALIASES: dict[str, Level] = {
    "warning": Level.WARN,
    "critical": Level.FATAL,
}


def rank(level: Level) -> int:
    """Return the integer rank of a level."""
    return int(level)


def at_least(level: Level, threshold: Level) -> bool:
    """Return True if ``level`` passes a logger gated at ``threshold``."""
    return rank(level) >= rank(threshold)


def from_external(severity: int) -> Level:
    """Map a stdlib ``logging`` severity onto the level table.

    Values between the standard constants round down to the closest defined
    level. Anything below DEBUG (including NOTSET) is TRACE, and anything at
    or above CRITICAL, including unknown higher values, is FATAL.

    Args:
        severity: Numeric severity such as ``logging.WARNING``.

    Returns:
        The corresponding Level.
        A Level passed in is returned unchanged.

    Raises:
        InvalidLevel: If severity is not a non-negative integer.
    """
    if isinstance(severity, Level):
        return severity
    if isinstance(severity, bool) or not isinstance(severity, int) or severity < 0:
        raise InvalidLevel(severity)
    result = Level.TRACE
    for level in (Level.DEBUG, Level.INFO, Level.WARN, Level.ERROR, Level.FATAL):
        if severity >= _EXTERNAL_VALUES[level]:
            result = level
    return result


def to_external(level: Level) -> int:
    """Return the stdlib ``logging`` severity for a level."""
    return _EXTERNAL_VALUES[level]


def parse_level(value: "Level | str | int") -> Level:
    """Coerce a Level, a level name, or an external severity into a Level.

    Names are case-insensitive and accept the ``warning`` and ``critical``
    aliases. Plain integers are read as stdlib ``logging`` severities.

    Raises:
        InvalidLevel: If the value cannot be interpreted.
    """
    if isinstance(value, Level):
        return value
    if isinstance(value, str):
        key = value.strip().lower()
        if key in _ALIASES:
            return _ALIASES[key]
        try:
            return Level[key.upper()]
        except KeyError:
            raise InvalidLevel(value) from None
    if isinstance(value, int) and not isinstance(value, bool):
        return from_external(value)
    raise InvalidLevel(value)
