"""
BMP Blend - File Format Errors

Exceptions raised by the rule, blend and SimpleFile readers.
"""

from typing import Optional


class BmpFileError(ValueError):
    """Raised when a rule or blend file can't be read or parsed."""

    pass


class RulesFileError(BmpFileError):
    pass


class MalformedRuleLine(RulesFileError):
    """Raised when a rule line has too few fields or a bad value."""

    def __init__(self, path: str, line_number: int, reason: str):
        self.path = path
        self.line_number = line_number
        self.reason = reason
        super().__init__(f"{path}:{line_number}: {reason}")


class SimpleFileError(BmpFileError):
    """Raised on block/brace syntax errors."""

    pass


class BlendsFileError(BmpFileError):
    pass


class UnknownBlockError(BlendsFileError):
    pass


class UnknownAttributeError(BlendsFileError):
    pass


class UnknownDirectionError(BlendsFileError):
    pass


def read_error(path: str, error: Exception, error_class: Optional[type] = None) -> BmpFileError:
    """Wrap an OS or decoding error in a BmpFileError naming the file being read."""
    error_class = error_class or BmpFileError
    reason = getattr(error, "strerror", None) or str(error)
    return error_class(f"{reason}\n(while reading {path})")
