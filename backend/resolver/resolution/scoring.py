"""Name-similarity confidence scoring."""


def calculate_confidence(query_name: str, candidate_name: str) -> float:
    """Score how likely a candidate name refers to the queried place.

    Rules are checked in order and the first match wins:
    - exact match (case-insensitive, trimmed) -> 1.0
    - candidate contains query -> 0.9, query contains candidate -> 0.85
    - word overlap ratio >= 0.5 -> 0.7 + ratio * 0.2
    - any shared word -> 0.5
    - otherwise -> 0.3

    Args:
        query_name: Name from the unresolved place
        candidate_name: Name returned by a provider

    Returns:
        Confidence in [0, 1]
    """
    query = (query_name or "").lower().strip()
    candidate = (candidate_name or "").lower().strip()

    if candidate == query:
        return 1.0

    if query in candidate:
        return 0.9
    if candidate in query:
        return 0.85

    query_words = set(query.split())
    candidate_words = set(candidate.split())
    shared = query_words & candidate_words
    overlap = len(shared) / max(len(query_words), 1)

    if overlap >= 0.5:
        return min(1.0, 0.7 + overlap * 0.2)

    if shared:
        return 0.5

    return 0.3
