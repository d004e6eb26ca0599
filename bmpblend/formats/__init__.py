"""
Rule and blend file formats.
"""

from .errors import (
    BlendsFileError,
    BmpFileError,
    MalformedRuleLine,
    RulesFileError,
    SimpleFileError,
    UnknownAttributeError,
    UnknownBlockError,
    UnknownDirectionError,
)
from .rules_file import read_rules_file, write_rules_file
from .blends_file import read_blends_file, write_blends_file

__all__ = [
    "BlendsFileError",
    "BmpFileError",
    "MalformedRuleLine",
    "RulesFileError",
    "SimpleFileError",
    "UnknownAttributeError",
    "UnknownBlockError",
    "UnknownDirectionError",
    "read_rules_file",
    "write_rules_file",
    "read_blends_file",
    "write_blends_file",
]
