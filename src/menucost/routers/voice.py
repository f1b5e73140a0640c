"""API routes for dictated input: cleanup, ingredient matching and parsing."""

from fastapi import APIRouter
from pydantic import BaseModel, Field

from menucost.logging_config import get_logger
from menucost.voice import (
    COMMON_INGREDIENTS,
    CleanedVoiceInput,
    EnhancedVoiceParsingResult,
    IngredientContext,
    IngredientMatch,
    ParsedPriceListItem,
    clean_voice_input,
    extract_ingredients_from_text,
    find_best_ingredient_match,
    format_price_list_item,
    parse_enhanced_voice_input,
    parse_ingredient_price_list,
    suggest_ingredient_corrections,
    validate_and_normalize_parsed_ingredient,
    validate_price_list_item,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/voice", tags=["voice"])


# Request/Response schemas
class TextRequest(BaseModel):
    """Raw dictated text."""

    text: str


class ContextIn(BaseModel):
    """Dish context for ingredient matching."""

    dish_type: str | None = None
    cuisine_type: str | None = None
    previous_ingredients: list[str] = Field(default_factory=list)
    common_combinations: dict[str, list[str]] = Field(default_factory=dict)


class MatchRequest(BaseModel):
    """Request to match spoken text against an ingredient catalog."""

    text: str
    catalog: list[str] | None = None
    context: ContextIn | None = None

    def resolved_catalog(self) -> list[str]:
        return self.catalog if self.catalog is not None else list(COMMON_INGREDIENTS)

    def resolved_context(self) -> IngredientContext | None:
        if self.context is None:
            return None
        return IngredientContext(**self.context.model_dump())


class MatchResponse(BaseModel):
    match: IngredientMatch | None


class MatchListResponse(BaseModel):
    matches: list[IngredientMatch]
    total: int


class CorrectionRequest(BaseModel):
    text: str
    catalog: list[str] | None = None
    limit: int = Field(default=5, ge=1, le=20)


class ParseRequest(BaseModel):
    """Request to parse a dictated dish description."""

    text: str
    target_food_cost_percentage: float | None = Field(default=None, gt=0, le=100)
    clean: bool = True
    normalize: bool = False


class PriceListItemOut(BaseModel):
    item: ParsedPriceListItem
    is_valid: bool
    errors: list[str]
    display: str


class PriceListResponse(BaseModel):
    items: list[PriceListItemOut]
    total: int


# =============================================================================
# Voice Endpoints
# =============================================================================


@router.post("/clean", response_model=CleanedVoiceInput)
async def clean_text(request: TextRequest) -> CleanedVoiceInput:
    """Remove fillers, stutters and repetitions and detect the language."""
    return clean_voice_input(request.text)


@router.post("/match", response_model=MatchResponse)
async def match_ingredient(request: MatchRequest) -> MatchResponse:
    """Best catalog match for a spoken ingredient name."""
    match = find_best_ingredient_match(
        request.text, request.resolved_catalog(), request.resolved_context()
    )
    return MatchResponse(match=match)


@router.post("/extract", response_model=MatchListResponse)
async def extract_ingredients(request: MatchRequest) -> MatchListResponse:
    """All catalog ingredients mentioned in a phrase."""
    matches = extract_ingredients_from_text(
        request.text, request.resolved_catalog(), request.resolved_context()
    )
    return MatchListResponse(matches=matches, total=len(matches))


@router.post("/corrections", response_model=MatchListResponse)
async def suggest_corrections(request: CorrectionRequest) -> MatchListResponse:
    """Suggested corrections for a misheard ingredient name."""
    catalog = request.catalog if request.catalog is not None else list(COMMON_INGREDIENTS)
    matches = suggest_ingredient_corrections(request.text, catalog, request.limit)
    return MatchListResponse(matches=matches, total=len(matches))


@router.post("/parse", response_model=EnhancedVoiceParsingResult)
async def parse_dish(request: ParseRequest) -> EnhancedVoiceParsingResult:
    """
    Parse a dictated dish description into ingredients with cost.

    The text is cleaned first unless `clean` is false. With `normalize`
    each ingredient line is validated and rescored.
    """
    text = clean_voice_input(request.text).cleaned_text if request.clean else request.text
    result = parse_enhanced_voice_input(text, request.target_food_cost_percentage)
    if request.normalize:
        result.ingredients = [
            validate_and_normalize_parsed_ingredient(ingredient)
            for ingredient in result.ingredients
        ]
    logger.info(f"Parsed dish {result.dish_name!r} with {len(result.ingredients)} ingredients")
    return result


@router.post("/price-list", response_model=PriceListResponse)
async def parse_price_list(request: TextRequest) -> PriceListResponse:
    """Parse a dictated supplier price list."""
    items = []
    for item in parse_ingredient_price_list(request.text):
        is_valid, errors = validate_price_list_item(item)
        items.append(
            PriceListItemOut(
                item=item, is_valid=is_valid, errors=errors, display=format_price_list_item(item)
            )
        )
    return PriceListResponse(items=items, total=len(items))
