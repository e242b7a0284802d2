from pydantic import BaseModel, Field


class CandidateItem(BaseModel):
    """A third-party skill returned by the catalog search."""

    id: str
    name: str = ""
    description: str = ""
    categories: list[str] = Field(default_factory=list)
    base_relevance: float = Field(default=0.0, ge=0.0, description="Catalog similarity score, used for ties")
    version: str | None = None
    url: str | None = None
    creator: str | None = None
    is_suspicious: bool = False
    is_malware_blocked: bool = False

    @property
    def text(self) -> str:
        """Lower-cased searchable text: name, description and categories."""
        return " ".join([self.name, self.description, " ".join(self.categories)]).lower()


class RankedCandidate(BaseModel):
    candidate: CandidateItem
    score: float = Field(ge=0, le=100)
    is_recommended: bool = False
    reasons: list[str] = Field(default_factory=list)
    breakdown: dict[str, float] = Field(default_factory=dict)
