from __future__ import annotations

from typing import Iterable, List, Sequence

import pytest


class ScriptedRandom:
    """Random source that replays fixed values so selections can be asserted exactly."""

    def __init__(self, values: Iterable[float] = (), pick: int = 0) -> None:
        self.values: List[float] = list(values)
        self.pick = pick
        self.choices: List[list] = []

    def random(self) -> float:
        return self.values.pop(0) if self.values else 0.999

    def choice(self, seq: Sequence):
        options = list(seq)
        self.choices.append(options)
        return options[self.pick]


@pytest.fixture
def scripted_rng():
    return ScriptedRandom


@pytest.fixture
def recording_sleep():
    class RecordingSleep:
        def __init__(self) -> None:
            self.calls: List[float] = []

        def __call__(self, seconds: float) -> None:
            self.calls.append(seconds)

    return RecordingSleep()
