"""Shared fixtures for the wavefront chase tests."""

from __future__ import annotations

from typing import List

import pytest


class ScriptedRng:
    """Stand-in for numpy's Generator that replays fixed choice indices."""

    def __init__(self, picks: List[int]):
        self.picks = list(picks)
        self.calls = 0

    def integers(self, high):
        assert self.picks, "scripted random source exhausted"
        pick = self.picks.pop(0)
        assert 0 <= pick < high, f"scripted pick {pick} not below {high}"
        self.calls += 1
        return pick


@pytest.fixture
def scripted_rng():
    """Factory: scripted_rng([1, 0, ...]) -> ScriptedRng."""
    return ScriptedRng
