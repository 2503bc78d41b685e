"""Identifier casing and name-set validation.

Names handed to the engine (page names, component names, ...) are single
words made of letters and digits.  Every name is expanded once into the
casing variants templates can ask for.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, fields

from .errors import DuplicateNameError, InvalidNameError

NAME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9]*$")


@dataclass(frozen=True)
class CaseVariants:
    """Every capitalization form derived from one raw identifier."""

    raw: str
    lower: str
    pascal: str
    camel: str
    kebab: str

    def get(self, casing: str) -> str | None:
        """Return the variant called *casing*, or ``None`` if there is no such variant."""
        if casing not in CASINGS:
            return None
        return getattr(self, casing)


CASINGS: frozenset[str] = frozenset(f.name for f in fields(CaseVariants))


def case_variants(name: str) -> CaseVariants:
    """Expand *name* into its casing variants.

    The input is treated as a single word: only the first character changes
    case for ``pascal`` and ``camel``, and ``kebab`` has no inner boundaries
    to hyphenate.

    Examples::

        case_variants("dashboard").pascal    -> "Dashboard"
        case_variants("ProjectCard").camel   -> "projectCard"
        case_variants("ProjectCard").kebab   -> "projectcard"

    Raises:
        InvalidNameError: If *name* is not a letters-and-digits identifier
            starting with a letter.
    """
    if not isinstance(name, str) or not NAME_PATTERN.fullmatch(name):
        raise InvalidNameError(str(name))

    lower = name.lower()
    return CaseVariants(
        raw=name,
        lower=lower,
        pascal=name[0].upper() + name[1:],
        camel=name[0].lower() + name[1:],
        kebab=lower,
    )


@dataclass(frozen=True)
class NameSet:
    """Ordered, duplicate-free sequence of validated identifiers.

    Order is preserved exactly as supplied; it decides the order in which
    per-name files are planned, written, and reported.
    """

    names: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        names = tuple(self.names)
        seen: set[str] = set()
        for name in names:
            case_variants(name)
            if name in seen:
                raise DuplicateNameError(name)
            seen.add(name)
        object.__setattr__(self, "names", names)

    @classmethod
    def of(cls, names: "NameSet | Iterable[str]") -> "NameSet":
        """Coerce an existing NameSet or any iterable of strings."""
        if isinstance(names, NameSet):
            return names
        if isinstance(names, str):
            raise InvalidNameError(names, "expected a sequence of names, got a single string")
        return cls(tuple(names))

    def variants(self) -> list[CaseVariants]:
        return [case_variants(name) for name in self.names]

    def __iter__(self) -> Iterator[str]:
        return iter(self.names)

    def __len__(self) -> int:
        return len(self.names)

    def __contains__(self, name: object) -> bool:
        return name in self.names
