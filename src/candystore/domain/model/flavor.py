"""Flavor aggregate.

A flavor is the unit of stock: every 3-pack recipe is a mix of flavors and
every flavor owns exactly one inventory record.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from candystore.domain.exceptions import ValidationError


@dataclass
class Flavor:
    """A sellable candy flavor, addressable by name or any alias."""

    id: int | None
    name: str
    aliases: frozenset[str] = field(default_factory=frozenset)
    active: bool = True

    @staticmethod
    def create(name: str, aliases: list[str] | None = None, active: bool = True) -> Flavor:
        if not name or not name.strip():
            raise ValidationError("Flavor name is required")
        return Flavor(
            id=None,
            name=name.strip(),
            aliases=_clean_aliases(aliases or []),
            active=bool(active),
        )

    def rename(self, name: str) -> None:
        if not name or not name.strip():
            raise ValidationError("Flavor name is required")
        self.name = name.strip()

    def set_aliases(self, aliases: list[str]) -> None:
        self.aliases = _clean_aliases(aliases)

    def matches(self, name: str) -> bool:
        """True if *name* is this flavor's name or one of its aliases."""
        needle = name.strip().lower()
        if self.name.lower() == needle:
            return True
        return any(alias.lower() == needle for alias in self.aliases)


def _clean_aliases(aliases: list[str]) -> frozenset[str]:
    return frozenset(a.strip() for a in aliases if a and a.strip())
