from typing import List, Tuple

import numpy as np

CREW_PREFIX = "T"


def crew_label_for(round_position: int, crew_count: int) -> str:
    """Label of the crew receiving the ``round_position``-th task of a period (0-based)."""
    if crew_count < 1:
        raise ValueError("Crew count must be at least 1.")
    if round_position < 0:
        raise ValueError(f"Round position must be >= 0; got {round_position}.")
    return f"{CREW_PREFIX}{1 + round_position % crew_count}"


def crew_labels(crew_count: int) -> Tuple[str, ...]:
    return tuple(crew_label_for(k, crew_count) for k in range(crew_count))


def crew_numbers(task_count: int, crew_count: int) -> np.ndarray:
    """1-based crew number for each of ``task_count`` consecutive tasks."""
    if crew_count < 1:
        raise ValueError("Crew count must be at least 1.")
    return np.arange(task_count, dtype=np.int64) % crew_count + 1


class CrewRotor:
    """Hands out crew labels round-robin within a single period."""

    def __init__(self, crew_count: int) -> None:
        if crew_count < 1:
            raise ValueError("Crew count must be at least 1.")
        self._crew_count = crew_count
        self._consumed = 0

    def next_label(self) -> str:
        label = crew_label_for(self._consumed, self._crew_count)
        self._consumed += 1
        return label

    def take(self, n: int) -> List[str]:
        return [self.next_label() for _ in range(n)]

    def reset(self) -> None:
        self._consumed = 0

    @property
    def crew_count(self) -> int:
        return self._crew_count

    @property
    def consumed(self) -> int:
        return self._consumed

    @property
    def round_position(self) -> int:
        return self._consumed % self._crew_count

    @property
    def rounds_started(self) -> int:
        return -(-self._consumed // self._crew_count)

    @property
    def labels(self) -> Tuple[str, ...]:
        return crew_labels(self._crew_count)

    def __repr__(self) -> str:
        return (
            f"CrewRotor(crew_count={self._crew_count}, "
            f"consumed={self._consumed}, "
            f"next={crew_label_for(self._consumed, self._crew_count)!r})"
        )
