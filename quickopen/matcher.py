"""Subsequence matching for the directory filter.

A name passes when every filter character appears in it, in order and
case-insensitively. Passing names carry per-character highlight runs for the
renderer. There is no score: display order is the listing order.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class MatchRun:
    """A slice of a display name, tagged matched or unmatched."""

    text: str
    matched: bool = False


def _same_char(needle: str, ch: str) -> bool:
    return needle == ch or needle.upper() == ch.upper()


def match(filter_text: str, name: str) -> tuple[MatchRun, ...] | None:
    """Return highlight runs when ``filter_text`` is a subsequence of ``name``.

    The scan is greedy: each filter character takes the first equal name
    character after the previous hit. Characters skipped on the way are
    unmatched, as is everything after the last hit. Returns ``None`` when the
    name runs out first.

    An empty filter yields one unmatched run holding the whole name.
    """
    if not filter_text:
        return (MatchRun(name),)

    runs: list[MatchRun] = []
    cursor = 0
    for needle in filter_text:
        while cursor < len(name):
            ch = name[cursor]
            cursor += 1
            if _same_char(needle, ch):
                runs.append(MatchRun(ch, matched=True))
                break
            runs.append(MatchRun(ch))
        else:
            return None

    runs.extend(MatchRun(ch) for ch in name[cursor:])
    return tuple(runs)


def merge_runs(runs: Iterable[MatchRun]) -> list[MatchRun]:
    """Join neighbouring runs that share a tag."""
    merged: list[MatchRun] = []
    for run in runs:
        if merged and merged[-1].matched == run.matched:
            merged[-1] = MatchRun(merged[-1].text + run.text, run.matched)
            continue
        merged.append(run)
    return merged


__all__ = ["MatchRun", "match", "merge_runs"]
