"""SKU generation for 3-pack recipes.

A SKU spells out the pack kind and its flavor mix, e.g. a sour pack of
watermelon, cherry and berry delight becomes ``3P-SOR-WAT-CHE-BERDEL``
and three red twists become ``3P-TRD-REDx3``.
"""

from __future__ import annotations

from collections.abc import Iterable
from types import MappingProxyType

UNKNOWN_CODE = "UNK"

KIND_CODES = MappingProxyType(
    {
        "Traditional": "TRD",
        "Sour": "SOR",
        "Sweet": "SWE",
    }
)

FLAVOR_CODES = MappingProxyType(
    {
        "Red Twist": "RED",
        "Blue Raspberry": "BLURAS",
        "Fruit Rainbow": "FRURAI",
        "Green Apple": "GREAPP",
        "Watermelon": "WAT",
        "Cherry": "CHE",
        "Berry Delight": "BERDEL",
        "Cotton Candy": "COT",
        "Strawberry Banana": "STRBAN",
    }
)


def generate_sku(kind: str, items: Iterable) -> str:
    """Build the SKU for a recipe of *kind* made of *items*.

    Items are ``(flavor_name, quantity)`` pairs or objects with
    ``flavor_name`` and ``quantity`` attributes (such as ``RecipeItem``),
    taken in the order given. Unknown kinds and flavors map to ``UNK``.
    """
    kind_code = KIND_CODES.get(kind, UNKNOWN_CODE)
    components = []
    for item in items:
        if isinstance(item, tuple):
            flavor_name, quantity = item
        else:
            flavor_name, quantity = item.flavor_name, item.quantity
        code = FLAVOR_CODES.get(flavor_name, UNKNOWN_CODE)
        components.append(f"{code}x{quantity}" if quantity > 1 else code)
    return "-".join(["3P", kind_code, *components])
