"""Resolve an imprecise file path or free-text topic to one graph node id.

Resolution is an ordered chain of pure heuristics. Each heuristic takes the
query and the known node ids and returns an id or ``None``; the first
non-``None`` answer wins and later heuristics never run.

Path chain:

1. exact id
2. case-insensitive id
3. ``.js``/``.ts`` or ``.jsx``/``.tsx`` extension swap
4. basename, disambiguated by the longest common directory suffix
5. topic scoring (substring, basename, whole words, path segments)

Topic queries skip straight to step 5.
"""

from __future__ import annotations

import logging
import posixpath
import re
from typing import Callable, Dict, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

Heuristic = Callable[[str, Sequence[str]], Optional[str]]

EXTENSION_SWAPS = {".js": ".ts", ".ts": ".js", ".jsx": ".tsx", ".tsx": ".jsx"}

SUBSTRING_SCORE = 10
BASENAME_SCORE = 15
WORD_SCORE = 5
SEGMENT_SCORE = 3


def normalize_query(query: str) -> str:
    """Trim whitespace, use forward slashes, and drop a leading ``./``."""
    text = query.strip().replace("\\", "/")
    while text.startswith("./"):
        text = text[2:]
    return text


def _dirname(path: str) -> str:
    return posixpath.dirname(path) or "."


def _stem(path: str) -> str:
    return posixpath.splitext(posixpath.basename(path))[0]


def _lowercase_index(known_ids: Sequence[str]) -> Dict[str, str]:
    index: Dict[str, str] = {}
    for node_id in known_ids:
        index.setdefault(node_id.lower(), node_id)
    return index


def exact_match(query: str, known_ids: Sequence[str]) -> Optional[str]:
    return query if query in set(known_ids) else None


def case_insensitive_match(query: str, known_ids: Sequence[str]) -> Optional[str]:
    """Match ignoring case; the first id seen wins when ids differ only by case."""
    return _lowercase_index(known_ids).get(query.lower())


def extension_swap_match(query: str, known_ids: Sequence[str]) -> Optional[str]:
    """Retry with the paired extension, e.g. ``src/app.js`` -> ``src/app.ts``."""
    stem, ext = posixpath.splitext(query)
    swapped_ext = EXTENSION_SWAPS.get(ext.lower())
    if swapped_ext is None:
        return None
    candidate = stem + swapped_ext
    return exact_match(candidate, known_ids) or case_insensitive_match(candidate, known_ids)


def common_suffix_length(a: str, b: str) -> int:
    """Length of the common trailing run of characters of ``a`` and ``b``."""
    length = 0
    for left, right in zip(reversed(a), reversed(b)):
        if left != right:
            break
        length += 1
    return length


def basename_match(query: str, known_ids: Sequence[str]) -> Optional[str]:
    """Match on extension-less basename, preferring the closest directory.

    With several candidates, each is scored by the common trailing run of its
    directory and the query's directory (case-insensitive). The first
    candidate wins ties.
    """
    target = _stem(query).lower()
    candidates = [node_id for node_id in known_ids if _stem(node_id).lower() == target]
    if not candidates:
        return None
    if len(candidates) == 1:
        return candidates[0]

    query_dir = _dirname(query).lower()
    return max(
        candidates,
        key=lambda node_id: common_suffix_length(_dirname(node_id).lower(), query_dir),
    )


def topic_score(query: str, node_id: str) -> int:
    """Relevance of ``node_id`` to a free-text ``query``; zero means unrelated."""
    needle = query.lower()
    haystack = node_id.lower()
    score = 0
    if needle in haystack:
        score += SUBSTRING_SCORE
    if needle in posixpath.basename(haystack):
        score += BASENAME_SCORE
    for word in query.split():
        if len(word) > 2 and re.search(rf"\b{re.escape(word)}\b", node_id, re.IGNORECASE):
            score += WORD_SCORE
    for segment in haystack.split("/"):
        if needle in segment:
            score += SEGMENT_SCORE
    return score


def topic_match(query: str, known_ids: Sequence[str]) -> Optional[str]:
    """Best-scoring id for a topic, first encountered on ties."""
    if not query.strip():
        return None
    best: Optional[str] = None
    best_score = 0
    for node_id in known_ids:
        score = topic_score(query, node_id)
        if score > best_score:
            best, best_score = node_id, score
    return best


PATH_HEURISTICS: Tuple[Heuristic, ...] = (
    exact_match,
    case_insensitive_match,
    extension_swap_match,
    basename_match,
    topic_match,
)

TOPIC_HEURISTICS: Tuple[Heuristic, ...] = (topic_match,)


def first_match(
    query: str,
    known_ids: Sequence[str],
    heuristics: Sequence[Heuristic],
) -> Tuple[Optional[str], Optional[str]]:
    """Run ``heuristics`` in order; return ``(node_id, heuristic_name)`` of the first hit."""
    for heuristic in heuristics:
        result = heuristic(query, known_ids)
        if result is not None:
            return result, heuristic.__name__
    return None, None


def resolve_seed(query: str, known_ids: Sequence[str], is_topic: bool = False) -> Optional[str]:
    """Resolve ``query`` to a known node id, or ``None`` when nothing matches.

    The result depends only on the arguments. ``known_ids`` order matters for
    tie-breaking, so pass ids in graph order.
    """
    if not query or not query.strip():
        return None

    if is_topic:
        node_id, matched_by = first_match(query.strip(), known_ids, TOPIC_HEURISTICS)
    else:
        node_id, matched_by = first_match(normalize_query(query), known_ids, PATH_HEURISTICS)

    if node_id is None:
        logger.info("Could not resolve %r to a graph node", query)
    else:
        logger.debug("Resolved %r to %s via %s", query, node_id, matched_by)
    return node_id
