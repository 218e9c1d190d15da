"""hdsigner high-level modules."""

from ..modules.account import Account, AccountOptions, TrackedPath, Word

__all__ = [
    "Account",
    "AccountOptions",
    "TrackedPath",
    "Word",
]
