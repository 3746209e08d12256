"""Unicode (group, subgroup) → game category mapping, plus display-name rules."""

from __future__ import annotations

import re

from findit.build.errors import UnmappedCategoryError

# Every subgroup in emoji-test.txt must appear here; a new Unicode release with
# an unknown subgroup stops the build until it is classified.
CATEGORY_BY_GROUP: dict[str, dict[str, str]] = {
    "Smileys & Emotion": {
        "cat-face": "internal:cat-face",
        "emotion": "faces",
        "face-affection": "faces",
        "face-concerned": "faces",
        "face-costume": "faces",
        "face-glasses": "faces",
        "face-hand": "faces",
        "face-hat": "faces",
        "face-negative": "faces",
        "face-neutral-skeptical": "faces",
        "face-sleepy": "faces",
        "face-smiling": "faces",
        "face-tongue": "faces",
        "face-unwell": "faces",
        "heart": "faces",
        "monkey-face": "internal:monkey-face",
    },
    "People & Body": {
        "body-parts": "people",
        "family": "internal:family",
        "hand-fingers-closed": "internal:hands",
        "hand-fingers-open": "internal:hands",
        "hand-fingers-partial": "internal:hands",
        "hand-prop": "people",
        "hand-single-finger": "internal:hands",
        "hands": "internal:hands",
        "person": "people",
        "person-activity": "internal:person-activity",
        "person-fantasy": "fantasy",
        "person-gesture": "people",
        "person-resting": "people",
        "person-role": "people",
        "person-sport": "sports",
        "person-symbol": "internal:person-symbol",
    },
    "Animals & Nature": {
        "animal-amphibian": "animals",
        "animal-bird": "animals",
        "animal-bug": "animals",
        "animal-mammal": "animals",
        "animal-marine": "animals",
        "animal-reptile": "animals",
        "plant-flower": "nature",
        "plant-other": "nature",
        "sky & weather": "weather",
    },
    "Food & Drink": {
        "dishware": "objects",
        "drink": "drinks",
        "food-asian": "food",
        "food-fruit": "fruits",
        "food-prepared": "food",
        "food-sweet": "food",
        "food-vegetable": "vegetables",
    },
    "Travel & Places": {
        "hotel": "places",
        "place-building": "places",
        "place-geographic": "places",
        # globes and maps would otherwise win "australia"/"japan" over the flags
        "place-map": "internal:place-map",
        "place-other": "places",
        "place-religious": "places",
        "sky & weather": "weather",
        "time": "time",
        "transport-air": "vehicles",
        "transport-ground": "vehicles",
        "transport-water": "vehicles",
    },
    "Activities": {
        "arts & crafts": "arts",
        "award-medal": "objects",
        "event": "celebration",
        "game": "games",
        "sport": "sports",
    },
    "Objects": {
        "book-paper": "school",
        "clothing": "clothing",
        "computer": "objects",
        "household": "objects",
        "light & video": "objects",
        "lock": "objects",
        "mail": "objects",
        "medical": "medical",
        "money": "objects",
        "music": "music",
        "musical-instrument": "music",
        "office": "school",
        "other-object": "objects",
        "phone": "objects",
        "science": "medical",
        "sound": "music",
        "tool": "tools",
        "writing": "school",
    },
    "Symbols": {
        "alphanum": "symbols",
        "arrow": "symbols",
        "av-symbol": "symbols",
        "currency": "symbols",
        "gender": "symbols",
        "geometric": "shapes",
        "keycap": "symbols",
        "math": "symbols",
        "other-symbol": "symbols",
        "punctuation": "symbols",
        "religion": "symbols",
        "time": "time",
        "transport-sign": "symbols",
        "warning": "symbols",
        "zodiac": "symbols",
    },
    "Flags": {
        "country-flag": "country",
        "flag": "flags",
        "subdivision-flag": "flags",
    },
    "Component": {
        "hair-style": "internal:component",
        "skin-tone": "internal:component",
    },
}

_LABEL_PREFIX_RE = re.compile(r"^[^:]+:\s+")


def map_category(group: str, subgroup: str) -> str:
    """Map a Unicode group/subgroup to its category, or raise."""
    group_map = CATEGORY_BY_GROUP.get(group)
    if group_map is None:
        raise UnmappedCategoryError(group)
    category = group_map.get(subgroup)
    if category is None:
        raise UnmappedCategoryError(group, subgroup)
    return category


def display_name(name: str, category: str) -> str:
    """Searchable form of a label: "grinning face" → "grinning", "flag: Japan" → "Japan"."""
    if category == "faces" and name.endswith(" face"):
        return name[: -len(" face")]
    if category == "country":
        stripped = _LABEL_PREFIX_RE.sub("", name).strip()
        if stripped:
            return stripped
    return name
