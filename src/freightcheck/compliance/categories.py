"""Shared goods-category vocabulary.

Country regulation profiles reference these tags; the item classifier maps
free-text descriptions onto them by keyword.
"""

from __future__ import annotations

PROHIBITED_CATEGORIES = {
    "drugs": ("drug", "narcotic", "cannabis", "marijuana", "cocaine", "heroin", "opium"),
    "weapons": ("weapon", "gun", "rifle", "pistol", "knife", "sword", "ammunition", "ammo"),
    "explosives": ("explosive", "bomb", "dynamite", "tnt", "fireworks", "firecracker"),
    "counterfeit": ("counterfeit", "fake", "replica", "imitation"),
    "batteries": ("battery", "lithium", "lipo", "li-ion", "li-poly"),
    "perfume": ("perfume", "cologne", "fragrance", "aftershave"),
    "alcohol": ("alcohol", "wine", "beer", "whiskey", "vodka", "spirits", "liquor"),
    "tobacco": ("tobacco", "cigarette", "cigar", "e-cigarette", "vape", "vaping"),
    "pork": ("pork", "bacon", "ham", "sausage"),
    "medication": ("medication", "medicine", "pharmaceutical", "prescription", "drug"),
}

RESTRICTED_CATEGORIES = {
    "electronics": ("electronic", "device", "computer", "laptop", "phone", "tablet", "camera"),
    "cosmetics": ("cosmetic", "makeup", "lipstick", "nail polish", "skincare"),
    "food": ("food", "chocolate", "candy", "snack", "beverage", "drink"),
    "plants": ("plant", "seed", "flower", "herb", "vegetable"),
    "animals": ("animal", "pet", "dog", "cat", "bird", "fish"),
    "liquids": ("liquid", "fluid", "oil", "paint", "ink"),
    "chemicals": ("chemical", "acid", "base", "solvent", "cleaner"),
}

# Checked on same-country shipments.
CRITICAL_CATEGORIES = ("drugs", "weapons", "explosives")

CATEGORY_VOCABULARY = frozenset(PROHIBITED_CATEGORIES) | frozenset(RESTRICTED_CATEGORIES)


def is_known_category(name: str) -> bool:
    return name in CATEGORY_VOCABULARY
