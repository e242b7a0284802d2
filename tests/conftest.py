"""
Shared fixtures for the unit suite.

Sample users are small but realistic: a crypto/AI builder with a rich
conversation and a community-oriented declared profile.
"""

import pytest

from bloom_identity.models.signals import (
    ConversationSnapshot,
    DeclaredProfile,
    Dimensions,
    FeedbackSignal,
    PublicProfile,
)


@pytest.fixture
def rich_conversation() -> ConversationSnapshot:
    """Conversation that detects ["AI Tools", "Crypto", "Wellness"] and earns every richness bonus."""
    return ConversationSnapshot(
        topics=["DeFi protocols", "AI agents", "community governance"],
        interests=["LLM", "yoga", "DAO"],
        preferences=[],
        history=[
            "How do I ship an agent that votes in a DAO?",
            "Which LLM is best for tool use?",
            "Comparing DeFi lending protocols",
            "Morning yoga keeps me sane",
            "Governance proposals are too long",
        ],
        message_count=8,
        dimensions=Dimensions(conviction=60, intuition=40, contribution=50),
    )


@pytest.fixture
def thin_conversation() -> ConversationSnapshot:
    return ConversationSnapshot(topics=["AI agents"], message_count=2)


@pytest.fixture
def community_profile() -> DeclaredProfile:
    """Role maps to Marketing; nudges are conviction -10, intuition +10, contribution +10."""
    return DeclaredProfile(role="Community Lead", working_style="explorer", interests=["Music"])


@pytest.fixture
def feedback() -> FeedbackSignal:
    return FeedbackSignal(category_weights={"Design": 2.0}, exclude_skill_ids=["skip-me"], event_count=5)


@pytest.fixture
def active_public_profile() -> PublicProfile:
    return PublicProfile(
        bio="Building onchain agents",
        posts=[f"post {i}" for i in range(12)],
        following=[f"user{i}" for i in range(25)],
    )
