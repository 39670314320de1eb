"""Keyword extraction from job descriptions.

Two passes over the text: a generic token filter over a cleaned, lowercased
copy, and a whitelist of technology/methodology phrases matched against the
original text. The phrase pass keeps names such as "node.js", "c#" or
"ci/cd" intact even where the token pass would drop or split them.
"""

from __future__ import annotations

import re

STOP_WORDS: frozenset[str] = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of",
    "with", "by", "from", "as", "is", "was", "are", "were", "been", "be",
    "being", "have", "has", "had", "do", "does", "did", "will", "would",
    "could", "should", "may", "might", "must", "can", "shall", "this", "that",
    "these", "those", "it", "its", "they", "them", "their", "we", "our", "ours",
    "you", "your", "yours", "i", "me", "my", "he", "she", "him", "her", "his",
    "who", "whom", "which", "what", "when", "where", "why", "how", "all",
    "each", "every", "both", "few", "more", "most", "other", "some", "such",
    "no", "nor", "not", "only", "own", "same", "so", "than", "too", "very",
    "just", "also", "now", "here", "there", "about", "after", "before",
    "between", "into", "through", "during", "above", "below", "up", "down",
    "out", "off", "over", "under", "again", "further", "then", "once", "any",
    "well", "if", "because", "while", "within", "across", "per", "via",
    "etc", "including", "include", "includes", "like", "using", "use",
    # Generic job-posting filler
    "work", "working", "works", "experience", "experienced", "years", "year",
    "team", "teams", "ability", "able", "strong", "looking", "seeking", "role",
    "position", "candidate", "candidates", "developer", "developers",
    "skills", "skill", "communication", "knowledge", "understanding",
    "responsibilities", "requirements", "required", "preferred", "plus",
    "bonus", "job", "company", "opportunity", "join", "help", "new", "great",
    "good", "excellent", "highly", "must-have", "nice", "related", "least",
    "minimum", "ideal", "ideally", "proven", "track", "record", "environment",
})

# Simple alternations only; each scan is a single linear pass.
# Boundaries are lookarounds rather than \b so names ending in '+' or '#' match.
_B = r"(?<![a-z0-9])"
_E = r"(?![a-z0-9])"

PHRASE_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(_B + body + _E, re.IGNORECASE)
    for body in (
        r"(?:machine learning|deep learning|data science|data engineering|"
        r"software engineer|full stack|front end|back end|devops|cloud computing|"
        r"project management|product management|business analysis|data analysis|"
        r"web development|mobile development|api development|database management|"
        r"system design|agile methodology|scrum master|ci/cd|version control|"
        r"unit testing|integration testing)",
        r"(?:react\.?js|react|node\.?js|vue\.?js|vue|angular\.?js|angular|next\.?js|"
        r"express\.?js|spring boot|ruby on rails|django|flask|fastapi|asp\.net|\.net core)",
        r"(?:aws|azure|gcp|google cloud|amazon web services|microsoft azure)",
        r"(?:python|javascript|typescript|java|c\+\+|c#|ruby|golang|go|rust|kotlin|"
        r"swift|php|scala)",
        r"(?:sql|nosql|mongodb|postgresql|mysql|redis|elasticsearch|dynamodb|cassandra)",
        r"(?:docker|kubernetes|terraform|jenkins|github actions|gitlab ci|ansible|"
        r"puppet|chef)",
    )
)

_CLEAN_RE = re.compile(r"[^a-z0-9\s\-/+#.]")


def extract_keyword_list(text: str) -> list[str]:
    """Return the lowercase keywords of ``text`` in first-seen order.

    Token-pass keywords come first, then phrase matches not already found.
    """
    if not text or not text.strip():
        return []

    cleaned = _CLEAN_RE.sub(" ", text.lower())
    keywords: dict[str, None] = {}
    for word in cleaned.split():
        word = word.rstrip(".")  # sentence-final periods
        if len(word) > 2 and word not in STOP_WORDS:
            keywords.setdefault(word)

    for pattern in PHRASE_PATTERNS:
        for m in pattern.finditer(text):
            keywords.setdefault(m.group(0).lower())

    return list(keywords)


def extract_keywords(text: str) -> set[str]:
    """Return the lowercase, de-duplicated keyword set of ``text``."""
    return set(extract_keyword_list(text))
