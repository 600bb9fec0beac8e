from __future__ import annotations

import pytest


class IdentityRandom:
    """Random source whose Fisher–Yates pass leaves every card in place."""

    def randrange(self, stop: int) -> int:
        return stop - 1


@pytest.fixture
def identity_rng() -> IdentityRandom:
    return IdentityRandom()
