"""Filters narrowing which catalog rows a query returns."""

from dataclasses import dataclass
from typing import Iterable, Optional


def create_oid_filter(oids: Iterable) -> tuple[str, ...]:
    """Normalize a collection of oids into a tuple of unique strings, keeping order."""
    seen: dict[str, None] = {}
    for oid in oids:
        seen.setdefault(str(oid).strip(), None)
    return tuple(oid for oid in seen if oid)


@dataclass(frozen=True)
class FilterSet:
    """Restrictions applied to a LIST or ATTRIBUTES query.

    An empty oid or parent filter means "no restriction". To fetch nothing on
    purpose, pass an oid no object can have (e.g. "0").
    """

    oids: tuple[str, ...] = ()
    schema: str = ""
    parent_oids: tuple[str, ...] = ()
    builtin_language: Optional[bool] = None
    exclude_system: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "oids", create_oid_filter(self.oids))
        object.__setattr__(self, "parent_oids", create_oid_filter(self.parent_oids))
