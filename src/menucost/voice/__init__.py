"""Dictation cleanup, ingredient matching and speech parsing."""

from menucost.voice.cleaning import (
    CleanedVoiceInput,
    clean_voice_input,
    detect_language,
    remove_stutters_and_repetitions,
)
from menucost.voice.matching import (
    COMMON_INGREDIENTS,
    IngredientContext,
    IngredientMatch,
    calculate_similarity,
    create_phonetic_key,
    extract_ingredients_from_text,
    find_best_ingredient_match,
    suggest_ingredient_corrections,
)
from menucost.voice.parsing import (
    EnhancedVoiceParsingResult,
    ParsedIngredientWithCost,
    estimate_ingredient_cost,
    parse_enhanced_voice_input,
    validate_and_normalize_parsed_ingredient,
)
from menucost.voice.price_list import (
    ParsedPriceListItem,
    format_price_list_item,
    parse_ingredient_price_list,
    validate_price_list_item,
)

__all__ = [
    "COMMON_INGREDIENTS",
    "CleanedVoiceInput",
    "EnhancedVoiceParsingResult",
    "IngredientContext",
    "IngredientMatch",
    "ParsedIngredientWithCost",
    "ParsedPriceListItem",
    "calculate_similarity",
    "clean_voice_input",
    "create_phonetic_key",
    "detect_language",
    "estimate_ingredient_cost",
    "extract_ingredients_from_text",
    "find_best_ingredient_match",
    "format_price_list_item",
    "parse_enhanced_voice_input",
    "parse_ingredient_price_list",
    "remove_stutters_and_repetitions",
    "suggest_ingredient_corrections",
    "validate_and_normalize_parsed_ingredient",
    "validate_price_list_item",
]
