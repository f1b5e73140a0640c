"""
Parsing of dictated supplier price lists.

Example input: "Avocado 2 Euro, Kartoffel 1.50, Zwiebel 0.80 pro Kilo"
"""

import re
from dataclasses import dataclass, field
from typing import Literal

from menucost.logging_config import get_logger
from menucost.voice.parsing import translate_ingredient_name

logger = get_logger(__name__)

ConfidenceLabel = Literal["high", "medium", "low"]

MAX_PRICE = 1000.0
DEFAULT_UNIT = "piece"

INGREDIENT_CATEGORIES: dict[str, tuple[str, ...]] = {
    "vegetables": (
        "avocado", "kartoffel", "zwiebel", "knoblauch", "tomaten", "paprika", "karotten",
        "spinat", "salat", "gurken", "brokkoli", "blumenkohl", "zucchini", "aubergine",
        "kürbis", "rote beete", "sellerie", "lauch", "radieschen", "kohl", "rosenkohl",
    ),
    "oils": ("olivenöl", "rapsöl", "sonnenblumenöl", "kokosöl", "sesamöl", "walnussöl"),
    "dairy": ("milch", "butter", "käse", "joghurt", "sahne", "quark", "frischkäse", "mozzarella"),
    "meat": ("hähnchen", "rind", "schwein", "lamm", "truthahn", "ente", "kalbfleisch"),
    "fish": ("lachs", "thunfisch", "forelle", "kabeljau", "garnelen", "muscheln", "tintenfisch"),
    "grains": ("reis", "nudeln", "brot", "mehl", "quinoa", "haferflocken", "bulgur", "couscous"),
    "spices": ("salz", "pfeffer", "oregano", "basilikum", "thymian", "rosmarin"),
    "fruits": ("äpfel", "bananen", "zitronen", "orangen", "beeren", "trauben", "erdbeeren"),
    "herbs": ("petersilie", "schnittlauch", "dill", "koriander", "minze", "salbei"),
}

DIETARY_TAGS: dict[str, tuple[str, ...]] = {
    "vegetables": ("vegetarian", "vegan"),
    "oils": ("vegetarian", "vegan"),
    "fruits": ("vegetarian", "vegan"),
    "grains": ("vegetarian", "vegan"),
    "spices": ("vegetarian", "vegan"),
    "herbs": ("vegetarian", "vegan"),
    "dairy": ("vegetarian",),
    "meat": (),
    "fish": (),
}

UNIT_NAMES: dict[str, str] = {
    "kg": "kg",
    "kilo": "kg",
    "kilogramm": "kg",
    "kilogram": "kg",
    "g": "g",
    "gramm": "g",
    "gram": "g",
    "l": "l",
    "liter": "l",
    "litre": "l",
    "ml": "ml",
    "milliliter": "ml",
    "stück": "piece",
    "stk": "piece",
    "piece": "piece",
    "pieces": "piece",
}

_NUMBER = r"\d+(?:[.,]\d+)?"
_UNIT = r"(kilogramm|kilogram|kilo|kg|gramm|gram|g|liter|litre|l|milliliter|ml|stück|stk|pieces|piece)"

PRICE_PATTERN = re.compile(
    rf"€\s*({_NUMBER})"
    rf"|({_NUMBER})\s*(?:euros?|eur|€)(?![a-zäöüß])"
    rf"|\b({_NUMBER})(?=\s*(?:pro|per|je|für)\b)"
    rf"|\b(\d+[.,]\d{{1,2}})\s*$",
    re.IGNORECASE,
)
PER_UNIT_PATTERN = re.compile(rf"\b(?:pro|per|je)\s*{_UNIT}\b", re.IGNORECASE)
QUANTITY_UNIT_PATTERN = re.compile(rf"\b{_NUMBER}\s*{_UNIT}\b", re.IGNORECASE)
PRICE_WITH_UNIT_PATTERN = re.compile(
    rf"(?:{PRICE_PATTERN.pattern})(?:\s*(?:pro|per|je)\s*{_UNIT}\b)?", re.IGNORECASE
)
NOISE_WORDS = re.compile(r"\b(?:pro|per|je|für|organic|bio)\b", re.IGNORECASE)
ELLIPSIS_SPLIT = re.compile(r"\.{2,}|\.\s+\.")
NEXT_WORD = re.compile(r"^\s*([a-zA-ZäöüÄÖÜß]+)")
CONNECTORS = frozenset({"pro", "per", "je", "für", "for"})


@dataclass
class ParsedPriceListItem:
    """One priced ingredient from a dictated price list."""

    name_de: str
    raw_input: str
    unit: str = DEFAULT_UNIT
    price: float | None = None
    price_unit: str | None = None  # "per kg", "per piece", ...
    name_en: str | None = None
    tags: list[str] = field(default_factory=list)
    confidence: ConfidenceLabel = "low"


def _to_price(value: str) -> float:
    return float(value.replace(",", "."))


def _split_at_prices(segment: str) -> list[str]:
    """Cut a segment after every price that is followed by another word."""
    pieces = []
    start = 0
    for match in PRICE_WITH_UNIT_PATTERN.finditer(segment):
        before = segment[start : match.start()].strip()
        next_word = NEXT_WORD.match(segment[match.end() :])
        if before and next_word and next_word.group(1).lower() not in CONNECTORS:
            pieces.append(segment[start : match.end()].strip())
            start = match.end()
    rest = segment[start:].strip()
    if rest:
        pieces.append(rest)
    return pieces


def split_price_list(text: str) -> list[str]:
    """
    Split a price list into one segment per ingredient.

    Commas and semicolons are tried first, then runs of dots, then the
    boundaries after each price ("Avocado 2 Euro Tomaten 3 Euro").
    """
    segments = [s.strip() for s in re.split(r"[,;]", text) if s.strip()]
    if len(segments) != 1:
        return segments

    segment = segments[0]
    if ELLIPSIS_SPLIT.search(segment):
        segments = [s.strip() for s in ELLIPSIS_SPLIT.split(segment) if s.strip()]
    if len(segments) == 1:
        segments = _split_at_prices(segment)
    return segments


def extract_price(segment: str) -> float | None:
    """First price in the segment within the accepted range."""
    for match in PRICE_PATTERN.finditer(segment):
        value = next(group for group in match.groups() if group)
        price = _to_price(value)
        if 0 < price < MAX_PRICE:
            return price
    return None


def extract_unit(segment: str) -> str | None:
    """Pricing unit: "pro kg" style first, then a quantity unit such as "12 Stück"."""
    for pattern in (PER_UNIT_PATTERN, QUANTITY_UNIT_PATTERN):
        match = pattern.search(segment)
        if match:
            unit = match.group(1).lower()
            return UNIT_NAMES.get(unit, unit)
    return None


def assign_dietary_tags(name: str) -> list[str]:
    """Dietary tags for the first ingredient category the name belongs to."""
    lower_name = name.lower()
    for category, items in INGREDIENT_CATEGORIES.items():
        for item in items:
            if item in lower_name or (len(lower_name) >= 3 and lower_name in item):
                return list(DIETARY_TAGS[category])
    return []


def _is_known_ingredient(name: str) -> bool:
    lower_name = name.lower()
    return any(item in lower_name for items in INGREDIENT_CATEGORIES.values() for item in items)


def determine_confidence(name: str, price: float | None, unit: str | None) -> ConfidenceLabel:
    # Scored in tenths: base 0.5, known name +0.3, plausible price +0.2, unit +0.1
    score = 5
    if _is_known_ingredient(name):
        score += 3
    if price is not None and 0.1 < price < 100:
        score += 2
    if unit:
        score += 1

    if score >= 8:
        return "high"
    if score >= 6:
        return "medium"
    return "low"


def _extract_name(segment: str) -> str:
    name = PRICE_PATTERN.sub(" ", segment)
    name = PER_UNIT_PATTERN.sub(" ", name)
    name = QUANTITY_UNIT_PATTERN.sub(" ", name)
    name = NOISE_WORDS.sub(" ", name)
    return re.sub(r"\s+", " ", name).strip(" .")


def parse_ingredient_price_list(text: str) -> list[ParsedPriceListItem]:
    """
    Parse a dictated price list into priced ingredients.

    Segments whose name is empty once price and unit are removed are
    dropped. Items without a unit default to "piece".
    """
    if not text or not text.strip():
        return []

    items = []
    for segment in split_price_list(text):
        name = _extract_name(segment)
        if not name:
            logger.debug(f"No ingredient name in price segment {segment!r}")
            continue

        price = extract_price(segment)
        unit = extract_unit(segment)
        translated = translate_ingredient_name(name)

        items.append(
            ParsedPriceListItem(
                name_de=name,
                name_en=translated if translated != name else None,
                price=price,
                unit=unit or DEFAULT_UNIT,
                price_unit=f"per {unit}" if unit else None,
                tags=assign_dietary_tags(name),
                confidence=determine_confidence(name, price, unit),
                raw_input=segment,
            )
        )

    logger.debug(f"Parsed {len(items)} price list items")
    return items


def validate_price_list_item(item: ParsedPriceListItem) -> tuple[bool, list[str]]:
    """Check a parsed item; returns (is_valid, errors)."""
    errors = []
    if not item.name_de or len(item.name_de) < 2:
        errors.append("Ingredient name too short")
    if item.price is not None and (item.price <= 0 or item.price > MAX_PRICE):
        errors.append("Price out of reasonable range")
    if not item.unit:
        errors.append("Unit not specified")
    return not errors, errors


def format_price_list_item(item: ParsedPriceListItem) -> str:
    """Display form, e.g. "Zwiebel €0.80 per kg (vegetarian, vegan)"."""
    parts = [item.name_de]
    if item.price:
        parts.append(f"€{item.price:.2f}")
    if item.price_unit:
        parts.append(item.price_unit)
    if item.tags:
        parts.append(f"({', '.join(item.tags)})")
    return " ".join(parts)
