"""Best-effort extraction of tool names from free-form assistant answers.

Any run of capitalised words counts as a candidate, so sentence-initial
words, headings and proper nouns that are not tools all show up as false
positives. Results are only suitable for a rough "who else got mentioned"
list.
"""

import re

CAPITALIZED_RUN_PATTERN = re.compile(r"\b[A-Z][a-z]+(?:\s+[A-Z][a-z]+)*\b")

STOP_WORDS = frozenset(
    {
        "The",
        "This",
        "That",
        "These",
        "Those",
        "Here",
        "There",
        "When",
        "Where",
        "What",
        "Which",
        "How",
    }
)


def extract_competitors(text: str, exclude: str | None = None) -> list[str]:
    exclude_lower = exclude.strip().lower() if exclude else ""
    competitors: list[str] = []
    seen: set[str] = set()

    for match in CAPITALIZED_RUN_PATTERN.findall(text):
        candidate = match.strip()
        if len(candidate) <= 2 or candidate in STOP_WORDS:
            continue
        if exclude_lower and exclude_lower in candidate.lower():
            continue
        if candidate not in seen:
            seen.add(candidate)
            competitors.append(candidate)

    return competitors
