from fastapi import APIRouter, Depends, HTTPException
from loguru import logger
from pydantic import BaseModel, Field

from bloom_identity.core.config import settings
from bloom_identity.models.catalog import CandidateItem, RankedCandidate
from bloom_identity.models.profile import GeneratedProfile
from bloom_identity.services.catalog.service import CatalogService, catalog_service
from bloom_identity.services.recommendation.engine import RecommendationEngine

from .profile import SignalsRequest, generate_or_raise

router = APIRouter(prefix="/recommendations", tags=["recommendations"])


class RecommendationRequest(SignalsRequest):
    limit: int = Field(default=settings.RECOMMENDATION_LIMIT, ge=1, le=50)


class RecommendationResponse(BaseModel):
    profile: GeneratedProfile
    recommendations: list[RankedCandidate]


class RankRequest(BaseModel):
    profile: GeneratedProfile
    candidates: list[CandidateItem] = Field(default_factory=list)


def get_catalog() -> CatalogService:
    return catalog_service


# Declared before "/{user_id}" so "rank" is not captured as a user id
@router.post("/rank", response_model=list[RankedCandidate])
async def rank_candidates(payload: RankRequest) -> list[RankedCandidate]:
    return RecommendationEngine.rank_candidates(payload.candidates, payload.profile)


@router.post("/{user_id}", response_model=RecommendationResponse)
async def recommend(
    user_id: str,
    payload: RecommendationRequest,
    catalog: CatalogService = Depends(get_catalog),
) -> RecommendationResponse:
    profile = await generate_or_raise(user_id, payload)

    engine = RecommendationEngine(catalog)
    try:
        recommendations = await engine.recommend(profile, limit=payload.limit)
    except Exception as e:
        logger.exception(f"[{user_id}] Recommendation failed: {e}")
        raise HTTPException(status_code=502, detail="Skill catalog unavailable") from e

    return RecommendationResponse(profile=profile, recommendations=recommendations)
