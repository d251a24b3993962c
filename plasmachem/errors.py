"""Exceptions raised while compiling a reaction list.

All of them derive from ``ValueError`` so callers that only care about
"bad input" can catch that.
"""


class ReactionListError(ValueError):
    """Base class for every reaction list compilation failure."""


class ReactionSyntaxError(ReactionListError):
    """A reaction line is malformed."""

    def __init__(self, message: str, line: str | None = None, line_number: int | None = None):  # noqa
        self.line = line
        self.line_number = line_number
        if line is not None:
            where = f"line {line_number}" if line_number is not None else "line"
            message = f"{message}\n  {where}: {line}"
        super().__init__(message)


class RateParseError(ReactionListError):
    """A constant rate coefficient is not a number."""


class OutOfRangeError(ReactionListError):
    """A number cannot be represented as a finite float."""


class ConfigError(ReactionListError):
    """The configuration is inconsistent."""


class BalanceError(ReactionListError):
    """One or more reactions do not conserve particles."""

    def __init__(self, offenders: list[str]):  # noqa
        self.offenders = list(offenders)
        lines = "".join(f"    {text}\n" for text in self.offenders)
        super().__init__(
            "The following equations are unbalanced:\n"
            + lines
            + "Fix unbalanced reactions or particle conservation will not be enforced."
        )


class FileMissingError(ReactionListError, FileNotFoundError):
    """No tabulated rate coefficient file was found for a reaction."""
