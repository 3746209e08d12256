"""Build-fatal errors. Any of these aborts the build before anything is written."""

from __future__ import annotations


class BuildError(Exception):
    """Base class for errors that must stop the database build."""


class SourceError(BuildError):
    """A raw source could not be fetched, read or parsed."""


class UnmappedCategoryError(BuildError):
    """A (group, subgroup) pair has no entry in the category table."""

    def __init__(self, group: str, subgroup: str | None = None) -> None:
        self.group = group
        self.subgroup = subgroup
        if subgroup is None:
            super().__init__(f'Unexpected group "{group}"')
        else:
            super().__init__(f'Unexpected subgroup "{subgroup}" for group "{group}"')


class EmptyNamesError(BuildError):
    """A symbol ended up with no names and could never be looked up."""

    def __init__(self, symbol: str) -> None:
        self.symbol = symbol
        super().__init__(f"Symbol {symbol!r} has no names")
