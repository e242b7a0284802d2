from fastapi import APIRouter, HTTPException
from loguru import logger
from pydantic import BaseModel, Field

from bloom_identity.core.config import settings
from bloom_identity.core.exceptions import InsufficientDataError
from bloom_identity.models.profile import GeneratedProfile
from bloom_identity.models.signals import ConversationSnapshot, DeclaredProfile, FeedbackSignal, PublicProfile
from bloom_identity.services.profile.service import ProfileService
from bloom_identity.services.signals.collector import SignalCollector
from bloom_identity.services.signals.declared_profile import MarkdownProfileSource, parse_declared_profile
from bloom_identity.services.signals.sources import (
    DeclaredProfileSource,
    StaticConversationSource,
    StaticDeclaredProfileSource,
    StaticFeedbackStore,
    StaticPublicProfileSource,
)

router = APIRouter(prefix="/profile", tags=["profile"])


class SignalsRequest(BaseModel):
    conversation: ConversationSnapshot = Field(description="Analyzed conversation for the user")
    declared_profile: DeclaredProfile | None = Field(default=None, description="Structured declared profile")
    declared_profile_markdown: str | None = Field(default=None, description="Raw USER.md content")
    use_local_declared_profile: bool = Field(
        default=False, description="Read the declared profile from DECLARED_PROFILE_PATH"
    )
    feedback: FeedbackSignal | None = None
    public_profile: PublicProfile | None = None
    include_static_profile: bool = True
    include_feedback: bool = True
    include_public_profile: bool = True


def _declared_profile_source(payload: SignalsRequest) -> DeclaredProfileSource | None:
    if payload.declared_profile is not None:
        return StaticDeclaredProfileSource(payload.declared_profile)
    if payload.declared_profile_markdown:
        return StaticDeclaredProfileSource(parse_declared_profile(payload.declared_profile_markdown))
    if payload.use_local_declared_profile:
        return MarkdownProfileSource(settings.DECLARED_PROFILE_PATH)
    return None


def build_profile_service(payload: SignalsRequest) -> ProfileService:
    collector = SignalCollector(
        conversation_source=StaticConversationSource(payload.conversation),
        declared_profile_source=_declared_profile_source(payload),
        feedback_store=StaticFeedbackStore(payload.feedback) if payload.feedback else None,
        public_profile_source=StaticPublicProfileSource(payload.public_profile) if payload.public_profile else None,
    )
    return ProfileService(collector)


async def generate_or_raise(user_id: str, payload: SignalsRequest) -> GeneratedProfile:
    """Generate a profile, mapping insufficient data to a 422 the client can route on."""
    service = build_profile_service(payload)
    try:
        return await service.generate_profile(
            user_id,
            include_static_profile=payload.include_static_profile,
            include_feedback=payload.include_feedback,
            include_public_profile=payload.include_public_profile,
        )
    except InsufficientDataError as e:
        logger.warning(f"[{user_id}] {e}")
        raise HTTPException(
            status_code=422,
            detail={
                "message": str(e),
                "message_count": e.message_count,
                "minimum": e.minimum,
                "needs_manual_input": True,
            },
        ) from e


@router.post("/{user_id}", response_model=GeneratedProfile)
async def generate_profile(user_id: str, payload: SignalsRequest) -> GeneratedProfile:
    return await generate_or_raise(user_id, payload)
