"""
Statistic identifiers, aliases and predefined sets, resolved into a canonical request.
"""
import re
from dataclasses import dataclass

from numstat.streaming.order_stats import check_quartile, check_rank

# Canonical output order.
STATISTICS = (
    "N",
    "min",
    "q1",
    "median",
    "q3",
    "max",
    "sum",
    "mean",
    "sd",
    "stderr",
    "variance",
    "mode",
)

ALIASES = {
    "N": ["n", "count"],
    "mean": ["avg", "m"],
    "sd": ["stddev", "std"],
    "variance": ["var"],
    "sum": ["s"],
    "stderr": ["sem", "se"],
}

PREDEFINED_SETS = {
    "default": ("N", "min", "max", "sum", "mean", "sd"),
    "summary": ("min", "q1", "median", "q3", "max"),
    "complete": ("N", "min", "q1", "median", "q3", "max", "sum", "mean", "sd", "stderr", "variance"),
}

# Statistics that need the full value buffer.
BUFFERED = frozenset({"q1", "median", "q3", "mode"})


class UnknownStatistic(ValueError):
    def __init__(self, name):
        super().__init__(f"unknown statistic: {name}")
        self.name = name


def normalize_alias(text):
    # "N" and "n" are the same statistic; case does not matter
    return re.sub(r"[^a-z0-9]+", "", str(text).lower())


def build_alias_index():
    index = {}
    for name in STATISTICS:
        for alias in ALIASES.get(name, []) + [name]:
            index[normalize_alias(alias)] = name
    return index


_ALIAS_INDEX = build_alias_index()


def canonical_name(name: str) -> str:
    key = normalize_alias(name)
    if key not in _ALIAS_INDEX:
        raise UnknownStatistic(name)
    return _ALIAS_INDEX[key]


def format_rank(rank: float) -> str:
    # distinct ranks must never share a key
    text = repr(float(rank))
    if text.endswith(".0"):
        text = text[:-2]
    return f"p{text}"


@dataclass(frozen=True)
class StatRequest:
    """Canonical set of requested statistics. Built once, before any input is read."""
    stats: tuple[str, ...] = PREDEFINED_SETS["default"]
    percentiles: tuple[float, ...] = ()
    quartiles: tuple[int, ...] = ()

    @property
    def needs_buffer(self) -> bool:
        # the only place that decides whether values are materialized
        return bool(self.percentiles or self.quartiles or BUFFERED.intersection(self.stats))

    @property
    def needs_frequencies(self) -> bool:
        return "mode" in self.stats

    def keys(self) -> list[str]:
        """Result keys in output order."""
        out = list(self.stats)
        out.extend(format_rank(r) for r in self.percentiles)
        out.extend(f"q{k}" for k in self.quartiles if f"q{k}" not in out)
        return out


def _dedupe(items):
    seen = []
    for item in items:
        if item not in seen:
            seen.append(item)
    return seen


def resolve_request(names=None, percentiles=None, quartiles=None) -> StatRequest:
    """
    Resolve statistic names (individual names, aliases or set names) plus
    percentile ranks and quartile numbers into a StatRequest.
    Without any names, percentiles or quartiles, the default set is used.
    Raises UnknownStatistic, InvalidRank or InvalidQuartile.
    """
    names = list(names or [])
    ranks = [check_rank(float(r)) for r in (percentiles or [])]
    ks = [check_quartile(k) for k in (quartiles or [])]
    if not names and not ranks and not ks:
        names = ["default"]

    requested = set()
    for name in names:
        set_name = normalize_alias(name)
        if set_name in PREDEFINED_SETS:
            requested.update(PREDEFINED_SETS[set_name])
        else:
            requested.add(canonical_name(name))

    stats = tuple(s for s in STATISTICS if s in requested)
    return StatRequest(stats=stats, percentiles=tuple(_dedupe(ranks)), quartiles=tuple(_dedupe(ks)))
