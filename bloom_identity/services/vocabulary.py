"""
Category Vocabulary.

Single source of truth for category names, detection keywords, declared-profile
mapping rules and identity-type keywords. Everything here is data; matching
helpers at the bottom are the only logic.

Categories describe WHAT a user is interested in. Identity types describe HOW
they think, and are independent of categories.
"""

import re
from collections.abc import Iterable
from functools import lru_cache
from typing import Final

from bloom_identity.models.profile import IdentityType
from bloom_identity.models.signals import DeclaredProfile

CANONICAL_CATEGORIES: Final[list[str]] = [
    "AI Tools",
    "Productivity",
    "Wellness",
    "Education",
    "Crypto",
    "Lifestyle",
    "Design",
    "Development",
    "Marketing",
    "Finance",
]

GENERAL_CATEGORY: Final[str] = "General"

# Used when a valid conversation mentions nothing we can map
DEFAULT_FALLBACK_CATEGORIES: Final[list[str]] = ["AI Tools", "Development", "Productivity"]

CATEGORY_KEYWORDS: Final[dict[str, list[str]]] = {
    "AI Tools": [
        "ai", "gpt", "llm", "machine learning", "neural", "model", "chatbot", "openai", "anthropic", "claude",
        "copilot", "prompt", "inference", "transformer", "agent", "gemini", "image gen", "text-to",
    ],
    "Productivity": [
        "productivity", "workflow", "automation", "efficiency", "task management", "notion", "calendar",
        "time tracking", "optimize", "systematic", "slide", "template", "formatter", "compress",
    ],
    "Wellness": [
        "wellness", "health", "fitness", "meditation", "mindfulness", "mental health", "yoga", "sleep",
        "nutrition", "self-care", "wellbeing",
    ],
    "Education": [
        "education", "learning", "course", "teach", "knowledge", "tutorial", "study", "mentor", "curriculum",
        "workshop", "training", "comic", "explainer",
    ],
    "Crypto": [
        "crypto", "defi", "web3", "blockchain", "token", "dao", "nft", "onchain", "smart contract", "wallet",
        "protocol", "ethereum", "solana", "base",
    ],
    "Lifestyle": ["lifestyle", "fashion", "travel", "personal brand", "food", "photography"],
    "Design": [
        "design", "ui", "ux", "figma", "creative", "visual", "typography", "layout", "prototype", "infographic",
        "illustration", "cover image", "graphic",
    ],
    "Development": [
        "development", "coding", "programming", "software", "engineering", "code", "developer", "api",
        "framework", "architecture", "debugging", "typescript", "python", "rust", "markdown", "html", "cli",
        "url-to", "converter", "formatter",
    ],
    "Marketing": [
        "marketing", "growth", "seo", "content strategy", "advertising", "brand", "conversion", "funnel",
        "campaign", "audience", "copywriting", "copy editing", "cro", "landing page", "onboarding", "churn",
        "referral", "email sequence", "cold email", "drip", "pricing", "paywall", "popup", "a/b test",
        "split test", "analytics", "tracking", "ads", "ad creative", "competitor", "launch", "social content",
        "social media", "post to x",
    ],
    "Finance": ["finance", "investing", "trading", "portfolio", "wealth", "stock", "market", "budget", "revenue"],
}

BLOCKED_KEYWORDS: Final[list[str]] = [
    "hack", "crack", "exploit", "phishing", "drainer", "stealer", "keylogger", "malware", "trojan", "botnet",
    "ransomware", "brute-force", "password-crack", "rat-tool", "spyware", "wallet-drainer", "token-grabber",
    "cookie-stealer",
]

# Declared profile -> category rules (prefix matches, like "develop" for "developer")
ROLE_CATEGORY_RULES: Final[list[tuple[str, str]]] = [
    (r"\b(bd|sales|growth|business dev)", "Marketing"),
    (r"\b(develop|engineer|programmer|software|coding)", "Development"),
    (r"\b(research|scientist|academic)", "Education"),
    (r"\b(design|ui|ux|creative)", "Design"),
    (r"\b(market|seo|content|brand)", "Marketing"),
    (r"\b(financ|invest|trad)", "Finance"),
    (r"\b(founder|cto|ceo|co-founder)", "Development"),
    (r"\b(community|advocate|ambassador)", "Marketing"),
]

FOCUS_CATEGORY_RULES: Final[list[tuple[str, str]]] = [
    (r"\b(defi|crypto|web3|blockchain|token|dao|nft|onchain)", "Crypto"),
    (r"\b(ai|llm|agent|machine learning|gpt|neural)", "AI Tools"),
    (r"\b(design|ui|ux|figma)", "Design"),
    (r"\b(educat|learn|teach|course)", "Education"),
    (r"\b(wellness|health|fitness|meditation)", "Wellness"),
    (r"\b(productiv|workflow|automat)", "Productivity"),
]

TECH_CATEGORY_RULES: Final[list[tuple[str, str]]] = [
    (r"\b(claude-code|claude|anthropic|openai|gpt)", "AI Tools"),
    (r"\b(typescript|javascript|python|rust|go|java)\b", "Development"),
    (r"\b(solidity|hardhat|foundry|ethers|viem|wagmi)", "Crypto"),
    (r"\b(react|next|vue|svelte|angular)", "Development"),
    (r"\b(figma|sketch|adobe)", "Design"),
]

# Declared profile -> raw dimension nudges (before weight scaling and clamping)
WORKING_STYLE_NUDGES: Final[dict[str, dict[str, int]]] = {
    "deep-focus": {"conviction": 15},
    "explorer": {"conviction": -10, "intuition": 10},
    "multitasker": {"conviction": -10, "intuition": 10},
}

ROLE_NUDGE_RULES: Final[list[tuple[str, dict[str, int]]]] = [
    (r"research", {"intuition": 10}),
    (r"community|\bbd\b|business dev|ambassador", {"contribution": 10}),
    (r"founder|\bcto\b|\bceo\b|co-founder", {"conviction": 10}),
]

PERSONALITY_KEYWORDS: Final[dict[IdentityType, list[str]]] = {
    IdentityType.VISIONARY: [
        "vision", "future", "disruptive", "revolutionary", "paradigm", "long-term", "moonshot", "transform",
    ],
    IdentityType.EXPLORER: [
        "explore", "discover", "experiment", "curious", "research", "new", "diverse", "insight",
    ],
    IdentityType.OPTIMIZER: [
        "optimize", "efficient", "performance", "streamline", "automate", "workflow", "productivity", "metrics",
    ],
    IdentityType.INNOVATOR: [
        "invent", "prototype", "novel", "tinker", "maker", "diy", "from scratch", "remix",
    ],
    IdentityType.CULTIVATOR: [
        "community", "collaborate", "share", "mentor", "support", "together", "social", "team",
    ],
}

_SUFFIXES = r"(?:s|es|ing|ed|er|ers)?"

# Keywords whose suffixed forms belong to another category (market -> marketing)
_PLURAL_ONLY_KEYWORDS: Final[frozenset[str]] = frozenset({"market"})


@lru_cache(maxsize=1024)
def _keyword_pattern(keyword: str) -> re.Pattern[str]:
    suffixes = r"s?" if keyword.lower() in _PLURAL_ONLY_KEYWORDS else _SUFFIXES
    return re.compile(rf"(?<![a-z0-9]){re.escape(keyword.lower())}{suffixes}(?![a-z0-9])")


def match_keywords(text: str, keywords: Iterable[str]) -> list[str]:
    """Return the distinct keywords present in text, in keyword order."""
    lowered = text.lower()
    found: list[str] = []
    for keyword in keywords:
        if keyword not in found and _keyword_pattern(keyword).search(lowered):
            found.append(keyword)
    return found


def detect_categories(texts: Iterable[str]) -> list[str]:
    """
    Detect canonical categories mentioned in free text.

    Args:
        texts: Topics, interests or other snippets

    Returns:
        Categories ordered by number of distinct keyword hits (canonical order breaks ties)
    """
    combined = " ".join(t for t in texts if t)
    if not combined.strip():
        return []

    hits = {category: len(match_keywords(combined, CATEGORY_KEYWORDS[category])) for category in CANONICAL_CATEGORIES}
    matched = [category for category in CANONICAL_CATEGORIES if hits[category] > 0]
    return sorted(matched, key=lambda c: hits[c], reverse=True)


def infer_categories(text: str) -> list[str]:
    """Categories for a catalog item, falling back to General."""
    categories = [
        category for category in CANONICAL_CATEGORIES if match_keywords(text, CATEGORY_KEYWORDS[category])
    ]
    return categories or [GENERAL_CATEGORY]


def contains_blocked_keyword(text: str) -> bool:
    """Word-boundary match for plain keywords, substring match for hyphenated ones."""
    lowered = text.lower()
    for keyword in BLOCKED_KEYWORDS:
        if "-" in keyword:
            if keyword in lowered:
                return True
        elif re.search(rf"\b{re.escape(keyword)}\b", lowered):
            return True
    return False


def _apply_rules(text: str, rules: list[tuple[str, str]], into: list[str]) -> None:
    for pattern, category in rules:
        if category not in into and re.search(pattern, text, re.IGNORECASE):
            into.append(category)


def map_declared_profile(profile: DeclaredProfile) -> list[str]:
    """Map role, current focus and tech stack to categories, first-detected order."""
    categories: list[str] = []
    if profile.role:
        _apply_rules(profile.role, ROLE_CATEGORY_RULES, categories)
    if profile.current_focus:
        _apply_rules(" ".join(profile.current_focus), FOCUS_CATEGORY_RULES, categories)
    if profile.tech_stack:
        _apply_rules(" ".join(profile.tech_stack), TECH_CATEGORY_RULES, categories)
    return categories
