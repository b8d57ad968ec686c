"""
Streaming statistics: online moments (constant memory) and order statistics
over a buffered sequence.
"""
from numstat.streaming.accumulator import MomentAccumulator, MomentSummary
from numstat.streaming.order_stats import (
    FrequencyTable,
    InvalidQuartile,
    InvalidRank,
    five_number,
    median,
    percentile,
    percentiles_of,
    quartile,
)

__all__ = [
    "MomentAccumulator",
    "MomentSummary",
    "FrequencyTable",
    "InvalidRank",
    "InvalidQuartile",
    "percentiles_of",
    "percentile",
    "median",
    "quartile",
    "five_number",
]
