"""
Order statistics over a fully materialized buffer: percentiles, quartiles, median,
five-number summary, and mode from an incrementally maintained frequency table.

Percentile method: index = p * (n - 1) / 100 on the ascending values (0-based).
An integral index selects that element; any fractional index averages the two
neighbouring elements floor(index) and floor(index) + 1, regardless of the
fractional weight.
"""
import math
from typing import Iterable, Sequence


class InvalidRank(ValueError):
    """Percentile rank outside [0, 100]."""

    def __init__(self, rank):
        super().__init__(f"percentile must be between 0 and 100, got {rank}")
        self.rank = rank


class InvalidQuartile(ValueError):
    """Quartile outside 0..4."""

    def __init__(self, quartile):
        super().__init__(f"quartile must be an integer between 0 and 4, got {quartile}")
        self.quartile = quartile


def check_rank(rank: float) -> float:
    if isinstance(rank, bool) or not isinstance(rank, (int, float)) or math.isnan(rank):
        raise InvalidRank(rank)
    if rank < 0 or rank > 100:
        raise InvalidRank(rank)
    return rank


def check_quartile(quartile: int) -> int:
    if isinstance(quartile, bool) or not isinstance(quartile, int):
        raise InvalidQuartile(quartile)
    if quartile < 0 or quartile > 4:
        raise InvalidQuartile(quartile)
    return quartile


def _percentile_sorted(sorted_values: Sequence[float], rank: float) -> float:
    index = rank * (len(sorted_values) - 1) / 100
    lower = math.floor(index)
    if index == lower:
        return sorted_values[lower]
    return (sorted_values[lower] + sorted_values[lower + 1]) / 2


def percentiles_of(values: Iterable[float], ranks: Sequence[float]) -> list[float]:
    """
    Return one percentile per requested rank. The input is not mutated; a private
    ascending copy is sorted once and shared by all ranks.
    """
    for rank in ranks:
        check_rank(rank)
    ordered = sorted(values)
    if not ordered:
        raise ValueError("percentiles of an empty sequence are undefined")
    return [_percentile_sorted(ordered, rank) for rank in ranks]


def percentile(values: Iterable[float], rank: float) -> float:
    return percentiles_of(values, [rank])[0]


def median(values: Iterable[float]) -> float:
    return percentile(values, 50)


def quartile(values: Iterable[float], k: int) -> float:
    return percentile(values, check_quartile(k) * 25)


def five_number(values: Iterable[float], minimum: float, maximum: float) -> dict[str, float]:
    """min/max are taken from the caller (the accumulator), not from the sorted copy."""
    q1, med, q3 = percentiles_of(values, [25, 50, 75])
    return {"min": minimum, "q1": q1, "median": med, "q3": q3, "max": maximum}


class FrequencyTable:
    """Value -> occurrence count, with the running maximum count."""

    def __init__(self) -> None:
        self.counts: dict[float, int] = {}
        self.most_common = 0

    def add(self, value: float) -> None:
        n = self.counts.get(value, 0) + 1
        self.counts[value] = n
        if n > self.most_common:
            self.most_common = n

    def mode(self) -> float | None:
        """The single most frequent value, or None when empty or tied."""
        if not self.counts:
            return None
        winners = [v for v, n in self.counts.items() if n == self.most_common]
        if len(winners) != 1:
            return None
        return winners[0]
