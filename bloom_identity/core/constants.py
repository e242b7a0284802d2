from typing import Final

# Conversation validity
MIN_CONVERSATION_MESSAGES: Final[int] = 3

# Data Quality (conversation is the primary source, public profile is supplemental)
QUALITY_CONVERSATION_BASE: Final[int] = 70
QUALITY_CONVERSATION_BONUS: Final[int] = 5  # Per richness criterion, up to +15
QUALITY_RICH_TOPICS: Final[int] = 3
QUALITY_RICH_INTERESTS: Final[int] = 3
QUALITY_RICH_HISTORY: Final[int] = 5
QUALITY_PUBLIC_BASE: Final[int] = 10
QUALITY_PUBLIC_ACTIVITY_BONUS: Final[int] = 3
QUALITY_PUBLIC_NETWORK_BONUS: Final[int] = 2
QUALITY_PUBLIC_ACTIVITY_MIN: Final[int] = 10
QUALITY_PUBLIC_NETWORK_MIN: Final[int] = 20
QUALITY_HIGH_CONFIDENCE: Final[int] = 75
QUALITY_MEDIUM_CONFIDENCE: Final[int] = 50

# Neutral baseline when no analyzer supplied dimensions
NEUTRAL_DIMENSION: Final[int] = 50

# Category Ranking
POSITION_DECAY: Final[float] = 0.1  # First entry 100%, second 90%, ...
FEEDBACK_INTRODUCE_THRESHOLD: Final[float] = 1.2  # Multiplier needed to add an unseen category
MAIN_CATEGORY_LIMIT: Final[int] = 3
SUB_CATEGORY_LIMIT: Final[int] = 10

# Dimension Nudges
NUDGE_LIMIT: Final[int] = 15
NUDGE_FULL_STATIC_WEIGHT: Final[float] = 0.3  # Static weight at which nudges apply at 100%

# Identity Classification
CULTIVATOR_CONTRIBUTION_THRESHOLD: Final[int] = 65  # Strictly greater than
QUADRANT_THRESHOLD: Final[int] = 50  # Inclusive: 50 counts as high

# Recommendation Scoring (additive, max 80)
SCORE_CATEGORY_MAIN: Final[int] = 30
SCORE_CATEGORY_SUB: Final[int] = 15
SCORE_PERSONALITY_PER_KEYWORD: Final[int] = 10
SCORE_PERSONALITY_MAX: Final[int] = 20
SCORE_CONVERSATION_PER_TERM: Final[int] = 5
SCORE_CONVERSATION_MAX: Final[int] = 15
SCORE_DIMENSION_BONUS: Final[int] = 5
BONUS_CONVICTION_MIN: Final[int] = 70
BONUS_INTUITION_MIN: Final[int] = 70
BONUS_CONTRIBUTION_MIN: Final[int] = 65
SCORE_MIN: Final[int] = 0
SCORE_MAX: Final[int] = 100
RECOMMENDATION_THRESHOLD: Final[int] = 60
