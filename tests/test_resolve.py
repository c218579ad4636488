from __future__ import annotations

import logging

from depwalk.resolve import (
    basename_match,
    case_insensitive_match,
    common_suffix_length,
    exact_match,
    extension_swap_match,
    first_match,
    normalize_query,
    PATH_HEURISTICS,
    resolve_seed,
    topic_match,
    topic_score,
)

IDS = [
    "src/App.ts",
    "src/auth/login.ts",
    "src/db/connection.ts",
    "lib/util/format.ts",
    "src/util/format.ts",
]


def test_exact_beats_extension_swap() -> None:
    assert resolve_seed("a/b.ts", ["a/b.ts", "a/b.js"]) == "a/b.ts"
    assert resolve_seed("a/b.js", ["a/b.ts", "a/b.js"]) == "a/b.js"


def test_extension_swap_through_basename() -> None:
    assert resolve_seed("Foo.js", ["src/Foo.ts"]) == "src/Foo.ts"


def test_resolution_is_deterministic() -> None:
    results = {resolve_seed("format", IDS) for _ in range(5)}

    assert len(results) == 1


def test_blank_query_resolves_to_none() -> None:
    assert resolve_seed("", IDS) is None
    assert resolve_seed("   ", IDS, is_topic=True) is None


def test_unmatched_query_resolves_to_none(caplog) -> None:
    with caplog.at_level(logging.INFO, logger="depwalk.resolve"):
        assert resolve_seed("nothing/here.py", IDS) is None

    assert "Could not resolve" in caplog.text


def test_query_is_normalized() -> None:
    assert normalize_query("  ./src\\App.ts ") == "src/App.ts"
    assert resolve_seed("  ./src\\App.ts ", IDS) == "src/App.ts"


def test_case_insensitive_match() -> None:
    assert case_insensitive_match("SRC/app.TS", IDS) == "src/App.ts"
    assert resolve_seed("SRC/app.TS", IDS) == "src/App.ts"


def test_extension_swap_match() -> None:
    assert extension_swap_match("src/App.js", IDS) == "src/App.ts"
    assert extension_swap_match("src/view.tsx", ["src/view.jsx"]) == "src/view.jsx"
    assert extension_swap_match("src/App.py", IDS) is None
    assert first_match("src/App.js", IDS, PATH_HEURISTICS) == ("src/App.ts", "extension_swap_match")


def test_basename_match_prefers_closest_directory() -> None:
    assert basename_match("app/src/util/format", IDS) == "src/util/format.ts"
    assert basename_match("lib/util/format.js", IDS) == "lib/util/format.ts"


def test_basename_match_first_candidate_wins_ties() -> None:
    assert basename_match("format", IDS) == "lib/util/format.ts"


def test_common_suffix_length() -> None:
    assert common_suffix_length("lib/util", "app/src/util") == 5
    assert common_suffix_length("src/util", "app/src/util") == 8
    assert common_suffix_length("abc", "xyz") == 0


def test_path_query_falls_back_to_topic() -> None:
    node_id, matched_by = first_match("db", IDS, PATH_HEURISTICS)

    assert node_id == "src/db/connection.ts"
    assert matched_by == "topic_match"


def test_topic_resolution() -> None:
    assert resolve_seed("auth", IDS, is_topic=True) == "src/auth/login.ts"
    assert resolve_seed("connection", IDS, is_topic=True) == "src/db/connection.ts"


def test_topic_mode_skips_path_heuristics() -> None:
    assert resolve_seed("login", IDS, is_topic=True) == "src/auth/login.ts"
    assert resolve_seed("Foo.js", ["src/Foo.ts"], is_topic=True) is None


def test_topic_score_components() -> None:
    # substring + whole word + one matching segment
    assert topic_score("auth", "src/auth/login.ts") == 10 + 5 + 3
    # substring + basename + whole word + segment
    assert topic_score("login", "src/auth/login.ts") == 10 + 15 + 5 + 3
    assert topic_score("billing", "src/auth/login.ts") == 0


def test_topic_ties_go_to_first_encountered() -> None:
    assert topic_match("auth", ["x/auth.ts", "y/auth.ts"]) == "x/auth.ts"


def test_exact_match() -> None:
    assert exact_match("src/App.ts", IDS) == "src/App.ts"
    assert exact_match("src/app.ts", IDS) is None
