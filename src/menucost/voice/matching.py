"""Matching of noisy spoken ingredient names against an ingredient catalog."""

import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Literal

from rapidfuzz import process
from rapidfuzz.distance import Levenshtein

from menucost.logging_config import get_logger

logger = get_logger(__name__)

MatchType = Literal["exact", "fuzzy", "phonetic", "substring", "context"]


# Common ingredient catalog used when the caller does not supply one
COMMON_INGREDIENTS: tuple[str, ...] = (
    # Vegetables
    "avocado", "tomato", "onion", "garlic", "ginger", "carrot", "celery", "pepper",
    "bell pepper", "mushroom", "spinach", "lettuce", "cucumber", "broccoli",
    "cauliflower", "zucchini", "eggplant", "potato", "sweet potato", "corn", "peas",
    "beans", "cabbage", "kale", "arugula", "basil", "parsley",
    # Proteins
    "chicken", "beef", "pork", "lamb", "fish", "salmon", "tuna", "shrimp", "eggs", "tofu",
    "tempeh", "bacon", "ham", "sausage", "turkey", "duck", "cod", "halibut", "scallops",
    "mussels", "crab",
    # Dairy & cheese
    "milk", "cream", "butter", "cheese", "cheddar", "mozzarella", "parmesan", "feta",
    "goat cheese", "ricotta", "cream cheese", "yogurt", "sour cream",
    # Grains & starches
    "rice", "pasta", "bread", "flour", "quinoa", "barley", "oats", "couscous", "bulgur",
    "noodles", "tortilla", "pita", "bagel", "croissant",
    # Fruits
    "lemon", "lime", "orange", "apple", "banana", "strawberry", "blueberry", "raspberry",
    "blackberry", "grape", "pineapple", "mango", "papaya", "kiwi", "peach", "pear", "plum",
    "cherry", "watermelon",
    # Pantry
    "salt", "sugar", "honey", "vinegar", "oil", "olive oil", "soy sauce", "sesame oil",
    "vanilla", "cinnamon", "cumin", "paprika", "oregano", "thyme", "rosemary",
    "bay leaves",
    # Nuts & seeds
    "almonds", "walnuts", "cashews", "peanuts", "pine nuts", "sesame seeds",
    "sunflower seeds", "pumpkin seeds", "chia seeds", "flax seeds",
)

# Dish type -> ingredients that commonly appear in it
INGREDIENT_COMBINATIONS: dict[str, tuple[str, ...]] = {
    "pasta": ("tomato", "basil", "garlic", "cheese", "olive oil"),
    "salad": ("lettuce", "tomato", "cucumber", "onion", "avocado"),
    "stir fry": ("soy sauce", "garlic", "ginger", "sesame oil", "rice"),
    "pizza": ("cheese", "tomato", "basil", "flour", "olive oil"),
    "soup": ("onion", "garlic", "celery", "carrot", "broth"),
    "curry": ("curry powder", "coconut milk", "onion", "garlic", "ginger"),
    "sandwich": ("bread", "lettuce", "tomato", "cheese", "mayo"),
    "breakfast": ("eggs", "bacon", "toast", "butter", "coffee"),
    "rice dish": ("rice", "soy sauce", "garlic", "ginger", "sesame oil"),
}

# Letter pairs folded to a single sound for phonetic keys
PHONETIC_REPLACEMENTS: tuple[tuple[str, str], ...] = (
    ("ph", "f"),
    ("ck", "k"),
    ("ch", "k"),
    ("th", "t"),
    ("gh", "g"),
)

# Acceptance thresholds per tier
FUZZY_THRESHOLD = 0.7
PHONETIC_THRESHOLD = 0.6
SUBSTRING_THRESHOLD = 0.5
CONTEXT_THRESHOLD = 0.6
SUGGESTION_THRESHOLD = 0.3

# Confidence scaling per tier
PHONETIC_EXACT_SCORE = 0.9
PHONETIC_SCALE = 0.8
SUBSTRING_SCALE = 0.7
CONTEXT_SCALE = 0.9

# Stop running weaker tiers once the best match reaches these scores
SKIP_PHONETIC_AT = 0.9
SKIP_SUBSTRING_AT = 0.8

# Minimum confidence for words/pairs picked out of free text
SINGLE_WORD_ACCEPT = 0.7
WORD_PAIR_ACCEPT = 0.8

_NON_LETTERS = re.compile(r"[^a-z]")
_REPEATED_LETTERS = re.compile(r"(.)\1+")
_VOWELS = re.compile(r"[aeiou]")


@dataclass(frozen=True)
class IngredientMatch:
    """Result of matching spoken text to a catalog ingredient."""

    ingredient: str
    confidence: float
    match_type: MatchType
    original_input: str


@dataclass
class IngredientContext:
    """What is known about the dish being dictated."""

    dish_type: str | None = None
    cuisine_type: str | None = None
    previous_ingredients: list[str] = field(default_factory=list)
    common_combinations: dict[str, list[str]] = field(default_factory=dict)

    def ingredients_for_dish(self) -> list[str]:
        """Ingredients expected for the dish type, built-in table first."""
        if not self.dish_type:
            return []
        dish = self.dish_type.lower().strip()
        expected = list(INGREDIENT_COMBINATIONS.get(dish, ()))
        for name in self.common_combinations.get(dish, []):
            if name not in expected:
                expected.append(name)
        return expected


# =============================================================================
# Similarity Measures
# =============================================================================


def calculate_similarity(first: str, second: str) -> float:
    """
    Levenshtein similarity in [0, 1]: 1 - distance / length of the longer string.

    Two empty strings are identical.
    """
    return Levenshtein.normalized_similarity(first.lower(), second.lower())


def create_phonetic_key(text: str) -> str:
    """
    Simplified phonetic key.

    Letters only, common digraphs folded ("ph" -> "f"), repeated letters
    collapsed and vowels removed after the first letter.
    """
    phonetic = _NON_LETTERS.sub("", text.lower())
    if not phonetic:
        return ""

    for pattern, replacement in PHONETIC_REPLACEMENTS:
        phonetic = phonetic.replace(pattern, replacement)

    phonetic = _REPEATED_LETTERS.sub(r"\1", phonetic)
    return phonetic[0] + _VOWELS.sub("", phonetic[1:])


def phonetic_similarity(first: str, second: str) -> float:
    """0.9 for equal phonetic keys, otherwise 0.8 x key similarity."""
    key1 = create_phonetic_key(first)
    key2 = create_phonetic_key(second)
    if key1 == key2:
        return PHONETIC_EXACT_SCORE
    return calculate_similarity(key1, key2) * PHONETIC_SCALE


# =============================================================================
# Matching
# =============================================================================


def _best_confidence(matches: list[IngredientMatch]) -> float:
    return max((m.confidence for m in matches), default=0.0)


def find_best_ingredient_match(
    text: str,
    catalog: Sequence[str] = COMMON_INGREDIENTS,
    context: IngredientContext | None = None,
) -> IngredientMatch | None:
    """
    Find the catalog ingredient that best matches a spoken name.

    Tiers run in order exact, fuzzy, phonetic, substring, context. Weaker
    tiers are skipped once a strong enough match exists. All candidates are
    pooled and the first candidate with the highest confidence, in
    tier-then-catalog order, wins.

    Args:
        text: Spoken or typed ingredient name.
        catalog: Canonical ingredient names.
        context: Optional dish context enabling the context tier.

    Returns:
        The best IngredientMatch, or None if nothing qualifies or the
        catalog is empty.
    """
    if not text or not text.strip() or not catalog:
        return None

    clean_input = text.lower().strip()
    matches: list[IngredientMatch] = []

    # 1. Exact
    for ingredient in catalog:
        if ingredient.lower() == clean_input:
            matches.append(IngredientMatch(ingredient, 1.0, "exact", text))

    # 2. Fuzzy
    if not matches:
        for ingredient in catalog:
            similarity = calculate_similarity(clean_input, ingredient)
            if similarity >= FUZZY_THRESHOLD:
                matches.append(IngredientMatch(ingredient, similarity, "fuzzy", text))

    # 3. Phonetic
    if _best_confidence(matches) < SKIP_PHONETIC_AT:
        for ingredient in catalog:
            score = phonetic_similarity(clean_input, ingredient)
            if score >= PHONETIC_THRESHOLD:
                matches.append(IngredientMatch(ingredient, score, "phonetic", text))

    # 4. Substring
    if _best_confidence(matches) < SKIP_SUBSTRING_AT:
        for ingredient in catalog:
            ingredient_lower = ingredient.lower()
            if ingredient_lower in clean_input or clean_input in ingredient_lower:
                ratio = min(len(clean_input), len(ingredient_lower)) / max(
                    len(clean_input), len(ingredient_lower)
                )
                if ratio >= SUBSTRING_THRESHOLD:
                    matches.append(
                        IngredientMatch(ingredient, ratio * SUBSTRING_SCALE, "substring", text)
                    )

    # 5. Context
    if context is not None:
        for ingredient in context.ingredients_for_dish():
            similarity = calculate_similarity(clean_input, ingredient)
            if similarity >= CONTEXT_THRESHOLD:
                matches.append(
                    IngredientMatch(ingredient, similarity * CONTEXT_SCALE, "context", text)
                )

    if not matches:
        logger.debug(f"No ingredient match for {text!r}")
        return None

    # sorted() is stable: equal confidences keep tier-then-catalog order
    return sorted(matches, key=lambda m: m.confidence, reverse=True)[0]


def extract_ingredients_from_text(
    text: str,
    catalog: Sequence[str] = COMMON_INGREDIENTS,
    context: IngredientContext | None = None,
) -> list[IngredientMatch]:
    """
    Pick catalog ingredients out of a free-text phrase.

    Single words of three or more letters are tried first, then adjacent
    word pairs whose words were not already used. One match is kept per
    ingredient (the most confident), sorted by confidence.
    """
    if not text or not text.strip():
        return []

    words = text.lower().split()
    matches: list[IngredientMatch] = []
    used_words: set[str] = set()

    for word in words:
        if word in used_words or len(word) < 3:
            continue
        match = find_best_ingredient_match(word, catalog, context)
        if match and match.confidence >= SINGLE_WORD_ACCEPT:
            matches.append(match)
            used_words.add(word)

    for first, second in zip(words, words[1:]):
        if first in used_words or second in used_words:
            continue
        match = find_best_ingredient_match(f"{first} {second}", catalog, context)
        if match and match.confidence >= WORD_PAIR_ACCEPT:
            matches.append(match)
            used_words.update((first, second))

    best_by_name: dict[str, IngredientMatch] = {}
    for match in matches:
        key = match.ingredient.lower()
        if key not in best_by_name or match.confidence > best_by_name[key].confidence:
            best_by_name[key] = match

    return sorted(best_by_name.values(), key=lambda m: m.confidence, reverse=True)


def _suggestion_score(query: str, choice: str, **kwargs) -> float:
    return max(calculate_similarity(query, choice), phonetic_similarity(query, choice))


def suggest_ingredient_corrections(
    text: str,
    catalog: Sequence[str] = COMMON_INGREDIENTS,
    limit: int = 5,
) -> list[IngredientMatch]:
    """
    "Did you mean" candidates for a low-confidence input.

    Scores every catalog entry by the better of its fuzzy and phonetic
    similarity and returns the top `limit` candidates scoring at least 0.3.
    """
    if not text or not text.strip() or not catalog or limit <= 0:
        return []

    clean_input = text.lower().strip()
    candidates = process.extract(
        clean_input,
        list(catalog),
        scorer=_suggestion_score,
        processor=str.lower,
        score_cutoff=SUGGESTION_THRESHOLD,
        limit=limit,
    )

    suggestions = []
    for ingredient, score, _ in candidates:
        similarity = calculate_similarity(clean_input, ingredient)
        match_type: MatchType = (
            "fuzzy" if similarity > phonetic_similarity(clean_input, ingredient) else "phonetic"
        )
        suggestions.append(IngredientMatch(ingredient, score, match_type, text))
    return suggestions
