from abc import ABC, abstractmethod

from bloom_identity.models.signals import ConversationSnapshot, DeclaredProfile, FeedbackSignal, PublicProfile


class ConversationSource(ABC):
    """
    Interface to the conversation analysis collaborator.

    Must report message_count truthfully so the minimum can be enforced.
    """

    @abstractmethod
    async def read_conversation(self, user_id: str) -> ConversationSnapshot:
        pass


class DeclaredProfileSource(ABC):
    @abstractmethod
    async def read_declared_profile(self) -> DeclaredProfile | None:
        pass


class FeedbackStore(ABC):
    @abstractmethod
    async def read_feedback(self, user_id: str) -> FeedbackSignal | None:
        pass


class PublicProfileSource(ABC):
    @abstractmethod
    async def read_public_profile(self, user_id: str) -> PublicProfile | None:
        pass


class StaticConversationSource(ConversationSource):
    """Serves a snapshot supplied by the caller."""

    def __init__(self, snapshot: ConversationSnapshot | None):
        self.snapshot = snapshot

    async def read_conversation(self, user_id: str) -> ConversationSnapshot:
        return self.snapshot or ConversationSnapshot()


class StaticDeclaredProfileSource(DeclaredProfileSource):
    def __init__(self, profile: DeclaredProfile | None):
        self.profile = profile

    async def read_declared_profile(self) -> DeclaredProfile | None:
        return self.profile


class StaticFeedbackStore(FeedbackStore):
    def __init__(self, feedback: FeedbackSignal | None):
        self.feedback = feedback

    async def read_feedback(self, user_id: str) -> FeedbackSignal | None:
        return self.feedback


class StaticPublicProfileSource(PublicProfileSource):
    def __init__(self, profile: PublicProfile | None):
        self.profile = profile

    async def read_public_profile(self, user_id: str) -> PublicProfile | None:
        return self.profile
