from __future__ import annotations

import random

WORD_CATEGORIES: dict[str, list[str]] = {
    "technology": [
        "javascript", "python", "computer", "programming", "algorithm", "database",
        "frontend", "backend", "developer", "software", "website", "application",
        "function", "variable", "array", "object", "string", "number", "boolean",
        "framework", "library", "component", "interface", "responsive", "design",
        "artificial", "intelligence", "machine", "learning", "blockchain",
    ],
    "animals": [
        "elephant", "giraffe", "penguin", "butterfly", "dolphin", "kangaroo",
        "cheetah", "octopus", "flamingo", "rhinoceros", "hippopotamus", "crocodile",
        "chameleon", "platypus", "armadillo", "hedgehog", "mongoose", "meerkat",
    ],
    "food": [
        "pizza", "hamburger", "spaghetti", "chocolate", "strawberry", "pineapple",
        "avocado", "broccoli", "sandwich", "pancake", "croissant", "lasagna",
        "quesadilla", "enchilada", "burrito", "tacos", "sushi", "ramen",
    ],
    "nature": [
        "mountain", "ocean", "forest", "desert", "rainbow", "thunder", "lightning",
        "waterfall", "volcano", "glacier", "meadow", "canyon", "valley", "plateau",
        "archipelago", "peninsula", "tundra", "savanna", "prairie", "oasis",
    ],
}

HINTS: dict[str, str] = {
    "javascript": "A popular programming language for web development",
    "python": "A snake-named programming language",
    "algorithm": "A step-by-step procedure for solving problems",
    "database": "Organized collection of data",
    "frontend": "The user-facing part of an application",
    "backend": "Server-side of an application",
    "framework": "A platform for developing software applications",
    "responsive": "Design that adapts to different screen sizes",
    "elephant": "Largest land mammal with a trunk",
    "giraffe": "Tallest mammal with a long neck",
    "penguin": "Flightless bird that lives in cold climates",
    "dolphin": "Intelligent marine mammal",
    "kangaroo": "Marsupial that hops and has a pouch",
    "cheetah": "Fastest land animal",
    "pizza": "Italian dish with cheese and toppings",
    "hamburger": "Sandwich with a meat patty",
    "chocolate": "Sweet treat made from cocoa",
    "avocado": "Green fruit rich in healthy fats",
    "spaghetti": "Long thin pasta",
    "mountain": "Large natural elevation of earth",
    "ocean": "Large body of salt water",
    "rainbow": "Colorful arc in the sky after rain",
    "waterfall": "Water falling from a height",
    "volcano": "Mountain that can erupt lava",
}


def all_words() -> list[str]:
    return [w for words in WORD_CATEGORIES.values() for w in words]


def can_scramble(word: str) -> bool:
    return len(set(word)) > 1


def scramble(word: str, rng: random.Random | None = None) -> str:
    """Return a permutation of ``word`` that differs from it."""
    if not can_scramble(word):
        raise ValueError(f"cannot scramble {word!r}")
    r = rng or random
    letters = list(word)
    while True:
        r.shuffle(letters)
        scrambled = "".join(letters)
        if scrambled != word:
            return scrambled


def hint(word: str) -> str:
    return HINTS.get(word.lower(), f"A word with {len(word)} letters")


def pick_words(count: int = 3, category: str | None = None) -> list[str]:
    if category and category in WORD_CATEGORIES:
        pool = list(WORD_CATEGORIES[category])
    else:
        pool = all_words()
    count = max(1, min(count, len(pool)))
    return random.sample(pool, count)
