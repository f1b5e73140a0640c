"""Cleanup of dictated text: fillers, stutters, repetitions and food-term mishearings."""

import re
from dataclasses import dataclass
from typing import Literal

from menucost.logging_config import get_logger
from menucost.normalize.units import UNIT_ALIASES

logger = get_logger(__name__)

Language = Literal["de", "en", "unknown"]


# =============================================================================
# Lookup Tables
# =============================================================================

# Known mis-transcriptions of food terms (English and German) -> correct spelling
FOOD_NAME_CORRECTIONS: dict[str, str] = {
    # Thai dishes
    "pad dye": "Pad Thai",
    "pad dy": "Pad Thai",
    "pad tie": "Pad Thai",
    "pad thai": "Pad Thai",
    "pad tai": "Pad Thai",
    # German dishes
    "schnitzel": "Schnitzel",
    "schnitsel": "Schnitzel",
    "spätzle": "Spätzle",
    "spaetzle": "Spätzle",
    "spetzle": "Spätzle",
    "bratwurst": "Bratwurst",
    "sauerkraut": "Sauerkraut",
    "currywurst": "Currywurst",
    "kartoffelpuffer": "Kartoffelpuffer",
    # Breakfast
    "pancakes": "Pancakes",
    "pan cakes": "Pancakes",
    "waffle": "Waffle",
    "waffles": "Waffles",
    "benedict": "Benedict",
    "eggs benedict": "Eggs Benedict",
    "croissant": "Croissant",
    "crossant": "Croissant",
    "croissont": "Croissant",
    # Ingredients
    "avocado": "Avocado",
    "avacado": "Avocado",
    "avacodo": "Avocado",
    "avakado": "Avocado",
    "tomato": "Tomato",
    "tomatoe": "Tomato",
    "tomatos": "Tomatoes",
    "mushroom": "Mushroom",
    "mushrume": "Mushroom",
    "mushrooms": "Mushrooms",
    "spinach": "Spinach",
    "spinich": "Spinach",
    "lemon": "Lemon",
    "lemmon": "Lemon",
    "lemons": "Lemons",
    "onion": "Onion",
    "onions": "Onions",
    "onyon": "Onion",
    "rice": "Rice",
    "ryce": "Rice",
    "chicken": "Chicken",
    "chiken": "Chicken",
    "chickin": "Chicken",
    "beef": "Beef",
    "beaf": "Beef",
    "carrot": "Carrot",
    "carot": "Carrot",
    "carrots": "Carrots",
    "pepper": "Pepper",
    "peppers": "Peppers",
    "peper": "Pepper",
    "garlic": "Garlic",
    "garlick": "Garlic",
    "ginger": "Ginger",
    "ginjer": "Ginger",
    "cheese": "Cheese",
    "cheeze": "Cheese",
    "oil": "Oil",
    "olive oil": "Olive Oil",
    "salt": "Salt",
    "sugar": "Sugar",
    "suger": "Sugar",
    "flour": "Flour",
    "flower": "Flour",
    # German ingredients
    "zwiebel": "Zwiebel",
    "zwibel": "Zwiebel",
    "knoblauch": "Knoblauch",
    "knobloch": "Knoblauch",
    "kartoffel": "Kartoffel",
    "kartofel": "Kartoffel",
    "olivenöl": "Olivenöl",
    "olivenoel": "Olivenöl",
}

FILLER_WORDS: frozenset[str] = frozenset(
    {
        # English hesitation sounds
        "um", "uh", "er", "ah", "eh", "mm", "hmm", "umm", "uhh", "ahh", "ohh", "erm",
        # German
        "äh", "ähm", "em", "ähem", "hm", "na", "naja", "also",
        # English discourse markers
        "like", "so", "well", "actually", "basically", "literally",
    }
)

# Multi-word fillers, matched on the token sequence
FILLER_PHRASES: tuple[tuple[str, ...], ...] = tuple(
    sorted(
        (
            tuple(phrase.split())
            for phrase in (
                "you know",
                "i mean",
                "let me see",
                "let me think",
                "you see",
                "kind of",
                "sort of",
                "i guess",
                "i think",
            )
        ),
        key=len,
        reverse=True,
    )
)

FILLER_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^(?:u+m+|u+h+|a+h+|e+h+|o+h+|h+m+)$"),  # elongated "ummm", "ahhh"
    re.compile(r"^\w{1,3}-{2,}\w+$"),  # stutters like "le--lemon"
    re.compile(r"^(\w)\1{2,}$"),  # repeated letters "mmm"
    re.compile(r"^\w{1,2}\.{2,}\w+$"),  # partial words "le...lemon"
    re.compile(r"^[aeiouäöü]{1,2}$"),  # stray vowel sounds
)

TOKEN_PUNCTUATION = ".,!?;:"

GERMAN_WORDS: frozenset[str] = frozenset(
    {
        "das", "die", "der", "den", "dem", "und", "mit", "ist", "haben", "sein", "nicht",
        "ich", "du", "sie", "wir", "ein", "eine", "für", "pro", "kostet", "heute",
        "schnitzel", "spätzle", "bratwurst", "sauerkraut", "currywurst", "bier", "wurst",
        "käse", "brot", "gemüse", "fleisch", "hähnchen", "schwein", "rind", "fisch",
        "kartoffel", "kartoffeln", "zwiebel", "zwiebeln", "knoblauch", "tomaten", "gurke",
        "salz", "pfeffer", "zitrone", "olivenöl", "sahne", "milch", "eier", "butter",
    }
)

ENGLISH_WORDS: frozenset[str] = frozenset(
    {
        "the", "and", "with", "is", "are", "have", "has", "not", "this", "that", "you",
        "we", "they", "for", "per", "of", "at", "costs", "today",
        "chicken", "beef", "pork", "fish", "vegetables", "potato", "potatoes", "onion",
        "onions", "garlic", "cheese", "bread", "pancakes", "waffle", "waffles", "eggs",
        "bacon", "toast", "avocado", "tomato", "tomatoes", "mushroom", "mushrooms",
        "spinach", "lemon", "lemons", "juice", "lime", "salt", "pepper", "sugar", "flour",
        "rice", "cream", "milk", "beans", "sauce", "soup", "salad",
    }
)

GERMAN_CHAR_PATTERN = re.compile(r"[äöüß]")
WORD_PATTERN = re.compile(r"[a-zäöüß]+")
SENTENCE_SPLIT_PATTERN = re.compile(r"([.!?]\s*)")
NUMBER_TOKEN_PATTERN = re.compile(r"^\d+(?:[.,]\d+)?$")

_CORRECTION_PATTERN = re.compile(
    r"\b("
    + "|".join(re.escape(k) for k in sorted(FOOD_NAME_CORRECTIONS, key=len, reverse=True))
    + r")\b",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class CleanedVoiceInput:
    """Cleaned dictation text and its detected language."""

    cleaned_text: str
    detected_language: Language


# =============================================================================
# Token Cleanup
# =============================================================================


def is_filler(word: str) -> bool:
    """Check if a single lowercase token is a filler word or stutter indicator."""
    clean_word = word.strip(TOKEN_PUNCTUATION)
    if not clean_word:
        return False
    if clean_word in FILLER_WORDS:
        return True
    return any(pattern.match(clean_word) for pattern in FILLER_PATTERNS)


def is_stutter(current: str, following: str) -> bool:
    """Check if current is a cut-off start of the following word ("pa" -> "pad")."""
    if not current or not following:
        return False
    return following.startswith(current) and len(current) < len(following)


def detect_phrase_repetition(words: list[str], start: int) -> int:
    """
    Length of a 2-4 word phrase at start that is immediately repeated, else 0.

    "pad thai pad thai" at 0 -> 2
    """
    max_length = min(4, (len(words) - start) // 2)
    for length in range(2, max_length + 1):
        first = words[start : start + length]
        second = words[start + length : start + 2 * length]
        if first == second:
            return length
    return 0


def _drop_fillers(words: list[str]) -> list[str]:
    kept: list[str] = []
    i = 0
    while i < len(words):
        phrase = next(
            (p for p in FILLER_PHRASES if tuple(words[i : i + len(p)]) == p),
            None,
        )
        if phrase:
            i += len(phrase)
            continue
        if not is_filler(words[i]):
            kept.append(words[i])
        i += 1
    return kept


def _is_unit_after_number(word: str, kept: list[str]) -> bool:
    return bool(kept) and word in UNIT_ALIASES and bool(NUMBER_TOKEN_PATTERN.match(kept[-1]))


def _collapse_repetitions(words: list[str]) -> list[str]:
    kept: list[str] = []
    i = 0
    while i < len(words):
        word = words[i]

        if kept and word == kept[-1]:
            i += 1
            continue

        # "200 g garlic": a unit after a number is never a cut-off word
        if (
            i + 1 < len(words)
            and not _is_unit_after_number(word, kept)
            and is_stutter(word, words[i + 1])
        ):
            i += 1
            continue

        phrase_length = detect_phrase_repetition(words, i)
        if phrase_length:
            kept.extend(words[i : i + phrase_length])
            i += phrase_length * 2
            continue

        kept.append(word)
        i += 1
    return kept


def apply_food_name_corrections(text: str) -> str:
    """Replace known food-term mishearings, longest entries first."""
    return _CORRECTION_PATTERN.sub(
        lambda m: FOOD_NAME_CORRECTIONS[m.group(0).lower()], text
    )


def proper_capitalization(text: str) -> str:
    """Capitalize the first letter of every sentence."""
    if not text:
        return text
    parts = SENTENCE_SPLIT_PATTERN.split(text)
    return "".join(part[0].upper() + part[1:] if part.strip() else part for part in parts)


def remove_stutters_and_repetitions(text: str) -> str:
    """
    Remove fillers, stutters and repeated words/phrases, then fix food terms.

    The cleanup is repeated until nothing changes, so cleaning an already
    cleaned text returns it unchanged.
    """
    if not text or not text.strip():
        return ""

    current = text.lower().split()
    corrected = " ".join(current)

    # Every pass only removes tokens or respells them, so this converges quickly
    for _ in range(len(current) + 1):
        words = _collapse_repetitions(_drop_fillers(current))
        corrected = apply_food_name_corrections(" ".join(words))
        next_words = corrected.lower().split()
        if next_words == current:
            break
        current = next_words

    return proper_capitalization(corrected).strip()


# =============================================================================
# Language Detection
# =============================================================================


def detect_language(text: str) -> Language:
    """
    Guess whether text is German or English.

    Each curated word occurrence scores its length; German umlauts or ß add
    a bonus of 10. Ties, empty and very short texts are "unknown".
    """
    if not text or len(text.strip()) < 3:
        return "unknown"

    lower_text = text.lower()
    german_score = 0
    english_score = 0

    for word in WORD_PATTERN.findall(lower_text):
        if word in GERMAN_WORDS:
            german_score += len(word)
        if word in ENGLISH_WORDS:
            english_score += len(word)

    if GERMAN_CHAR_PATTERN.search(lower_text):
        german_score += 10

    if german_score > english_score:
        return "de"
    if english_score > german_score:
        return "en"
    return "unknown"


def clean_voice_input(text: str) -> CleanedVoiceInput:
    """Clean dictated text and detect its language."""
    cleaned_text = remove_stutters_and_repetitions(text)
    detected_language = detect_language(cleaned_text)
    logger.debug(f"Cleaned voice input ({detected_language}): {cleaned_text!r}")
    return CleanedVoiceInput(cleaned_text=cleaned_text, detected_language=detected_language)
