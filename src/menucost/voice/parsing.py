"""
Speech-to-structured-ingredient parsing.

Turns a dictated dish description such as
"Tomato salad with 200g tomatoes at 3 euro per kilo and 50ml olive oil, serves 2"
into a dish name, ingredient lines with quantity, unit and price, an
estimated cost and a suggested menu price. English and German are
supported.
"""

import re
from dataclasses import dataclass, field, replace

from menucost.config import get_settings
from menucost.costing.pricing import calculate_suggested_price
from menucost.logging_config import get_logger
from menucost.normalize.units import convert_quantity, identify_unit_type, normalize_unit

logger = get_logger(__name__)

UNKNOWN_INGREDIENT = "Unknown ingredient"
DEFAULT_SEGMENT_CONFIDENCE = 0.8
FALLBACK_NAME_CONFIDENCE = 0.5
NO_INGREDIENTS_CONFIDENCE = 0.3
KILO_PER_POUND = 2.20462


# =============================================================================
# Vocabulary
# =============================================================================

# Spoken numbers (English and German)
WORD_TO_NUMBER: dict[str, float] = {
    # English
    "half": 0.5,
    "quarter": 0.25,
    "one": 1,
    "two": 2,
    "three": 3,
    "four": 4,
    "five": 5,
    "six": 6,
    "seven": 7,
    "eight": 8,
    "nine": 9,
    "ten": 10,
    "eleven": 11,
    "twelve": 12,
    "fifteen": 15,
    "twenty": 20,
    "thirty": 30,
    "forty": 40,
    "fifty": 50,
    "hundred": 100,
    "thousand": 1000,
    # German
    "halb": 0.5,
    "halbe": 0.5,
    "halber": 0.5,
    "halbes": 0.5,
    "viertel": 0.25,
    "ein": 1,
    "eine": 1,
    "einen": 1,
    "zwei": 2,
    "drei": 3,
    "vier": 4,
    "fünf": 5,
    "sechs": 6,
    "sieben": 7,
    "acht": 8,
    "neun": 9,
    "zehn": 10,
    "elf": 11,
    "zwölf": 12,
    "fünfzehn": 15,
    "zwanzig": 20,
    "dreißig": 30,
    "vierzig": 40,
    "fünfzig": 50,
    "hundert": 100,
    "tausend": 1000,
}

# German ingredient names -> English
GERMAN_INGREDIENTS: dict[str, str] = {
    "basilikum": "basil",
    "bunt basilikum": "mixed basil",
    "buntes basilikum": "mixed basil",
    "tomaten": "tomatoes",
    "tomate": "tomato",
    "gurke": "cucumber",
    "gurken": "cucumbers",
    "zwiebel": "onion",
    "zwiebeln": "onions",
    "rote zwiebel": "red onion",
    "rote zwiebeln": "red onions",
    "salat": "lettuce",
    "tomatensalat": "tomato salad",
    "olivenöl": "olive oil",
    "öl": "oil",
    "salz": "salt",
    "pfeffer": "pepper",
    "petersilie": "parsley",
    "schnittlauch": "chives",
    "dill": "dill",
    "oregano": "oregano",
    "thymian": "thyme",
    "rosmarin": "rosemary",
    "knoblauch": "garlic",
    "karotte": "carrot",
    "karotten": "carrots",
    "möhren": "carrots",
    "paprika": "bell pepper",
    "zitrone": "lemon",
    "zitronen": "lemons",
    "limette": "lime",
    "limetten": "limes",
    "kartoffel": "potato",
    "kartoffeln": "potatoes",
    "mehl": "flour",
    "zucker": "sugar",
    "butter": "butter",
    "milch": "milk",
    "sahne": "cream",
    "eier": "eggs",
    "käse": "cheese",
    "reis": "rice",
    "nudeln": "pasta",
    "hähnchen": "chicken",
    "hähnchenbrust": "chicken breast",
    "lachs": "salmon",
}

_NUMBER_WORDS = "|".join(sorted(WORD_TO_NUMBER, key=len, reverse=True))
_DECIMAL = r"\d+(?:[.,]\d+)?"
_ARTICLE = r"(?:\s+(?:a|an|ein|eine|einen))?"
_UNIT = (
    r"(kilogramm|kilograms?|kilos?|kg|grams?|gramm|gr|g|pounds?|lbs?|lb|ounces?|oz"
    r"|milliliters?|millilitres?|ml|liters?|litres?|l|cups?|tablespoons?|tbsp"
    r"|teaspoons?|tsp|pieces?|pcs?|stück|stk|each|dozen)"
)
_WORD_END = r"(?![a-zäöüß])"
_CURRENCY = r"(?:€|euros?|eur|dollars?|\$)"

# Digits may touch the unit ("200g"), number words may not ("zweig" is not "zwei g")
QUANTITY_PATTERN = re.compile(
    rf"\b(?:({_DECIMAL}){_ARTICLE}\s*|({_NUMBER_WORDS}){_ARTICLE}\s+){_UNIT}{_WORD_END}",
    re.IGNORECASE,
)

# "3 euro per kilo", "€3/kg", "3.50 pro kg", "costs 2 dollars per pound"
PER_UNIT_PRICE_PATTERN = re.compile(
    rf"(?:{_CURRENCY}\s*)?(\d+(?:[.,]\d+)?)\s*{_CURRENCY}?\s*(?:per|pro|je|/)\s*"
    rf"(kilogramm|kilograms?|kilos?|kg|pounds?|lbs?|lb|liters?|litres?|l|dozen|pieces?|stück|each)"
    rf"{_WORD_END}",
    re.IGNORECASE,
)

# "2 euro und 50 cent", "ein euro und 20 cent"
EURO_CENT_PRICE_PATTERN = re.compile(
    r"\b(?:(\d+)|ein|eine)\s*euros?\s*und\s*(\d+)\s*cent\b", re.IGNORECASE
)
# "50 cent und 2 euro", "50 cent und ein euro"
CENT_EURO_PRICE_PATTERN = re.compile(
    r"\b(\d+)\s*cent\s*und\s*(?:(\d+)|ein|eine)\s*euros?\b", re.IGNORECASE
)

# "2 euro", "1,50 €", "€3", "ein euro", "50 cent"
SIMPLE_PRICE_PATTERN = re.compile(
    rf"(?:(\d+(?:[.,]\d+)?)\s*(?:euros?|eur|€)(?![a-zäöüß])"
    rf"|€\s*(\d+(?:[.,]\d+)?)"
    rf"|\b(?:ein|eine)\s+euro\b"
    rf"|\b(\d+)\s*cent\b)",
    re.IGNORECASE,
)

PRICE_PATTERNS = (
    PER_UNIT_PRICE_PATTERN,
    EURO_CENT_PRICE_PATTERN,
    CENT_EURO_PRICE_PATTERN,
    SIMPLE_PRICE_PATTERN,
)

# Ingredient boundaries: a separator followed by a number
SEGMENT_SEPARATORS = (
    # not inside a decimal comma ("1,5 kg")
    re.compile(r"(?<!\d),\s*(?=\d)|,\s+(?=\d)"),
    # not inside "1 euro und 50 cent" / "50 cent und 2 euro"
    re.compile(
        r"\s+(?:and|und)\s+(?=\d)(?!\d+(?:[.,]\d+)?\s*(?:cent|euros?)\b)", re.IGNORECASE
    ),
    re.compile(r"\s+(?:with|mit)\s+(?=\d)", re.IGNORECASE),
    re.compile(r"\s+plus\s+(?=\d)", re.IGNORECASE),
)

CONNECTING_WORDS = re.compile(
    r"\b(?:of|with|at|per|pro|je|costs?|priced?|und|mit|für|kostet|for)\b", re.IGNORECASE
)
LEADING_ARTICLES = re.compile(
    r"^(?:(?:the|a|an|some|of|ein|eine|einen|der|die|das|den|dem|des)\s+)+", re.IGNORECASE
)
TRAILING_PREPOSITIONS = re.compile(r"(?:\s+(?:at|per|for|für|pro))+$", re.IGNORECASE)
BUNT_COMPOUND = re.compile(r"^bunt(?:e[rsnm]?)?\s*(.+)$")

_DISH_INTRO = (
    r"(?:this is|we have|today we're making|today we are making|i want to add|create"
    r"|das ist|wir haben|heute machen wir|ich möchte hinzufügen)"
)
_DISH_JOIN = r"(?:with|and|that|which|mit|und|das|die)"
DISH_NAME_PATTERNS = (
    re.compile(rf"\b{_DISH_INTRO}\s+([^.,;]+?)\s+{_DISH_JOIN}\b", re.IGNORECASE),
    re.compile(rf"\b{_DISH_INTRO}\s+([^.,;]+)", re.IGNORECASE),
    re.compile(rf"^([^.,;]+?)\s+{_DISH_JOIN}\b", re.IGNORECASE),
)

SERVING_PATTERNS = (
    re.compile(r"\b(?:serves?|servings?|portions?)\s+(\d+)", re.IGNORECASE),
    re.compile(
        r"\b(?:for|makes?|für|ergibt)\s+(\d+)\s+"
        r"(?:people|persons?|servings?|portions?|personen|portionen)\b",
        re.IGNORECASE,
    ),
    re.compile(r"\b(\d+)\s+(?:persons?|people|servings?|portions?|personen|portionen)\b", re.IGNORECASE),
)

_TIME_UNIT = r"(minutes?|mins?|minuten|hours?|hrs?|stunden?)"
PREP_TIME_PATTERNS = (
    re.compile(
        rf"\b(?:takes?|prep(?:aration)?(?:\s+time)?|cooking(?:\s+time)?|dauert"
        rf"|zubereitungszeit)\s+(\d+)\s*{_TIME_UNIT}\b",
        re.IGNORECASE,
    ),
    re.compile(
        rf"\b(\d+)\s*{_TIME_UNIT}\s+(?:prep|preparation|cooking|to\s+make|to\s+cook"
        rf"|zubereitung)\b",
        re.IGNORECASE,
    ),
)


# =============================================================================
# Result Types
# =============================================================================


@dataclass
class ParsedIngredientWithCost:
    """An ingredient line extracted from dictation."""

    name: str
    quantity: float
    unit: str
    confidence: float
    original_text: str
    currency: str = "EUR"
    price_per_kilo: float | None = None
    price_per_unit: float | None = None
    used_fallback: bool = False


@dataclass
class EnhancedVoiceParsingResult:
    """Structured version of a dictated dish description."""

    dish_name: str
    ingredients: list[ParsedIngredientWithCost] = field(default_factory=list)
    total_estimated_cost: float = 0.0
    suggested_price: float = 0.0
    serving_size: int = 1
    preparation_time: int | None = None
    confidence: float = NO_INGREDIENTS_CONFIDENCE
    description: str = ""
    category: str = ""
    cuisine_type: str = ""


@dataclass(frozen=True)
class QuantityMatch:
    quantity: float
    unit: str
    span: tuple[int, int]


@dataclass
class PriceInfo:
    price_per_kilo: float | None = None
    price_per_unit: float | None = None


# =============================================================================
# Helpers
# =============================================================================


def _to_number(value: str) -> float:
    value = value.lower()
    if value in WORD_TO_NUMBER:
        return float(WORD_TO_NUMBER[value])
    return float(value.replace(",", "."))


def split_into_ingredient_segments(text: str) -> list[str]:
    """
    Split dictation into one segment per ingredient.

    A comma, "and", "with" or "plus" (or German "und"/"mit") starts a new
    segment only when a number follows it. Ingredients mentioned without a
    quantity stay attached to the preceding segment.
    """
    segments = [text]
    for separator in SEGMENT_SEPARATORS:
        segments = [part for segment in segments for part in separator.split(segment)]
    return [s.strip() for s in segments if s.strip()]


def extract_quantity_and_unit(text: str) -> QuantityMatch | None:
    """First quantity with a recognised unit in text ("200g", "half a kilo", "zwei liter")."""
    for match in QUANTITY_PATTERN.finditer(text):
        quantity = _to_number(match.group(1) or match.group(2))
        unit = normalize_unit(match.group(3))
        if unit:
            return QuantityMatch(quantity=quantity, unit=unit, span=match.span())
    return None


def extract_pricing(text: str) -> PriceInfo:
    """
    Extract the price mentioned in a segment.

    Per-unit prices ("3 euro per kilo") are tried first, then German
    euro-and-cent compounds, then plain amounts ("2 euro", "50 cent"), which
    are taken as a price per unit.
    """
    pricing = PriceInfo()

    for match in PER_UNIT_PRICE_PATTERN.finditer(text):
        price = _to_number(match.group(1))
        unit_type, _ = identify_unit_type(match.group(2))
        unit = normalize_unit(match.group(2))
        if unit == "kg" or unit_type == "volume":
            # Liquids are priced as if they had the density of water
            pricing.price_per_kilo = price
        elif unit == "pounds":
            pricing.price_per_kilo = price * KILO_PER_POUND
        else:
            pricing.price_per_unit = price
        return pricing

    match = EURO_CENT_PRICE_PATTERN.search(text)
    if match:
        euros = float(match.group(1)) if match.group(1) else 1.0
        pricing.price_per_unit = euros + float(match.group(2)) / 100
        return pricing

    match = CENT_EURO_PRICE_PATTERN.search(text)
    if match:
        euros = float(match.group(2)) if match.group(2) else 1.0
        pricing.price_per_unit = euros + float(match.group(1)) / 100
        return pricing

    match = SIMPLE_PRICE_PATTERN.search(text)
    if match:
        amount, prefixed_amount, cents = match.groups()
        if cents:
            pricing.price_per_unit = float(cents) / 100
        elif amount or prefixed_amount:
            pricing.price_per_unit = _to_number(amount or prefixed_amount)
        else:
            pricing.price_per_unit = 1.0  # "ein euro"

    return pricing


def translate_ingredient_name(name: str) -> str:
    """Translate a German ingredient name to English where known."""
    lower_name = name.lower().strip()
    if lower_name in GERMAN_INGREDIENTS:
        return GERMAN_INGREDIENTS[lower_name]

    bunt = BUNT_COMPOUND.match(lower_name)
    if bunt:
        base = bunt.group(1).strip()
        return f"mixed {GERMAN_INGREDIENTS.get(base, base)}"

    return name


def extract_ingredient_name(segment: str, quantity: QuantityMatch) -> str:
    """Whatever is left of a segment once quantity, price and filler words are removed."""
    start, end = quantity.span
    name = segment[:start] + " " + segment[end:]

    for pattern in PRICE_PATTERNS:
        name = pattern.sub(" ", name)

    name = CONNECTING_WORDS.sub(" ", name)
    name = re.sub(r"[,;.]", " ", name)
    name = re.sub(r"\s+", " ", name).strip()
    name = LEADING_ARTICLES.sub("", name)
    name = TRAILING_PREPOSITIONS.sub("", name).strip()

    if not name:
        return UNKNOWN_INGREDIENT
    return translate_ingredient_name(name)


def parse_ingredient_segment(segment: str) -> ParsedIngredientWithCost | None:
    """Parse one ingredient segment; None when it carries no quantity."""
    quantity = extract_quantity_and_unit(segment)
    if quantity is None:
        logger.debug(f"No quantity in segment {segment!r}, skipping")
        return None

    name = extract_ingredient_name(segment, quantity)
    pricing = extract_pricing(segment)
    used_fallback = name == UNKNOWN_INGREDIENT

    return ParsedIngredientWithCost(
        name=name,
        quantity=quantity.quantity,
        unit=quantity.unit,
        currency=get_settings().currency,
        confidence=FALLBACK_NAME_CONFIDENCE if used_fallback else DEFAULT_SEGMENT_CONFIDENCE,
        original_text=segment.strip(),
        price_per_kilo=pricing.price_per_kilo,
        price_per_unit=pricing.price_per_unit,
        used_fallback=used_fallback,
    )


def extract_dish_name(text: str) -> str:
    """Dish name from an introductory phrase, else the first three words."""
    for pattern in DISH_NAME_PATTERNS:
        match = pattern.search(text)
        if match and match.group(1).strip():
            return match.group(1).strip()
    return " ".join(text.split()[:3])


def extract_serving_size(text: str) -> int | None:
    """Number of servings mentioned in text, if any."""
    for pattern in SERVING_PATTERNS:
        match = pattern.search(text)
        if match:
            return int(match.group(1))
    return None


def extract_preparation_time(text: str) -> int | None:
    """Preparation time in minutes mentioned in text, if any."""
    for pattern in PREP_TIME_PATTERNS:
        match = pattern.search(text)
        if match:
            minutes = int(match.group(1))
            if match.group(2).lower().startswith(("h", "stunde")):
                minutes *= 60
            return minutes
    return None


def _strip_metadata(text: str) -> str:
    for pattern in (*SERVING_PATTERNS, *PREP_TIME_PATTERNS):
        text = pattern.sub(" ", text)
    return text


def estimate_ingredient_cost(ingredient: ParsedIngredientWithCost) -> float:
    """
    Estimated cost of a parsed ingredient line.

    A price per kilo applies to the quantity converted to kg (liters count
    as kg). A price per unit is multiplied by counted quantities; for a
    weight or volume it is taken as the price of the stated amount.
    """
    unit_type, _ = identify_unit_type(ingredient.unit)

    if ingredient.price_per_kilo:
        target = "kg" if unit_type == "weight" else "liters"
        converted = convert_quantity(ingredient.quantity, ingredient.unit, target)
        if converted.success:
            return converted.quantity * ingredient.price_per_kilo
        logger.debug(f"Cannot apply price per kilo to {ingredient.quantity} {ingredient.unit}")
        return 0.0

    if ingredient.price_per_unit:
        if unit_type in ("weight", "volume"):
            return ingredient.price_per_unit
        return ingredient.quantity * ingredient.price_per_unit

    return 0.0


# =============================================================================
# Public API
# =============================================================================


def parse_enhanced_voice_input(
    text: str,
    target_food_cost_percentage: float | None = None,
) -> EnhancedVoiceParsingResult:
    """
    Parse a dictated dish description.

    Args:
        text: Transcript, ideally already cleaned.
        target_food_cost_percentage: Food cost target for the suggested
            price. Defaults to the configured target.

    Returns:
        EnhancedVoiceParsingResult. Segments without a quantity are
        skipped; when no ingredient is found confidence is 0.3.
    """
    if target_food_cost_percentage is None:
        target_food_cost_percentage = get_settings().target_food_cost_percentage

    if not text or not text.strip():
        return EnhancedVoiceParsingResult(dish_name="")

    logger.debug(f"Parsing voice input: {text!r}")

    ingredients = [
        ingredient
        for segment in split_into_ingredient_segments(_strip_metadata(text))
        if (ingredient := parse_ingredient_segment(segment)) is not None
    ]

    total_cost = sum(estimate_ingredient_cost(ing) for ing in ingredients)
    confidence = (
        sum(ing.confidence for ing in ingredients) / len(ingredients)
        if ingredients
        else NO_INGREDIENTS_CONFIDENCE
    )

    result = EnhancedVoiceParsingResult(
        dish_name=extract_dish_name(text),
        ingredients=ingredients,
        total_estimated_cost=total_cost,
        suggested_price=calculate_suggested_price(total_cost, target_food_cost_percentage),
        serving_size=extract_serving_size(text) or 1,
        preparation_time=extract_preparation_time(text),
        confidence=confidence,
    )

    logger.debug(
        f"Parsed {len(ingredients)} ingredients, cost={total_cost:.2f}, "
        f"price={result.suggested_price:.2f}"
    )
    return result


def validate_and_normalize_parsed_ingredient(
    ingredient: ParsedIngredientWithCost,
) -> ParsedIngredientWithCost:
    """
    Clean up a parsed ingredient and rescore its confidence.

    Name trimmed and capitalized, quantity floored at 0, unit spelled out,
    negative prices dropped. Confidence starts at 0.5 and gains 0.2 for a
    real name and 0.1 each for a positive quantity, a unit and a price.
    """
    name = ingredient.name.lower().strip()
    name = name[:1].upper() + name[1:]
    quantity = max(0.0, ingredient.quantity)
    unit = normalize_unit(ingredient.unit)

    price_per_kilo = ingredient.price_per_kilo
    if price_per_kilo is not None and price_per_kilo < 0:
        price_per_kilo = None
    price_per_unit = ingredient.price_per_unit
    if price_per_unit is not None and price_per_unit < 0:
        price_per_unit = None

    confidence = 0.5
    if name and name != UNKNOWN_INGREDIENT:
        confidence += 0.2
    if quantity > 0:
        confidence += 0.1
    if unit:
        confidence += 0.1
    if price_per_kilo or price_per_unit:
        confidence += 0.1

    return replace(
        ingredient,
        name=name,
        quantity=quantity,
        unit=unit,
        price_per_kilo=price_per_kilo,
        price_per_unit=price_per_unit,
        confidence=min(1.0, confidence),
    )
