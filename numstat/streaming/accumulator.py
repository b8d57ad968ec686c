"""
Welford's online algorithm: count, sum, min, max, mean and sample variance in one pass.
Values are never retained, so memory stays constant regardless of input size.
"""
import math
from dataclasses import dataclass


@dataclass(frozen=True)
class MomentSummary:
    """Finalized moment statistics. None means undefined for this input."""
    count: int
    sum: float | None
    min: float | None
    max: float | None
    mean: float | None
    variance: float | None
    sd: float | None

    @property
    def stderr(self) -> float | None:
        if self.sd is None:
            return None
        return self.sd / math.sqrt(self.count)


class MomentAccumulator:
    """Single-pass mean/variance with O(1) memory."""

    def __init__(self) -> None:
        self.count = 0
        self.sum = 0.0
        self.min: float | None = None
        self.max: float | None = None
        self.mean = 0.0
        self.m2 = 0.0

    def accept(self, value: float) -> None:
        self.count += 1
        # sum is tracked on its own, never derived from mean
        self.sum += value
        if self.min is None or value < self.min:
            self.min = value
        if self.max is None or value > self.max:
            self.max = value

        delta = value - self.mean
        self.mean += delta / self.count
        # second factor uses the updated mean
        self.m2 += delta * (value - self.mean)

    @property
    def variance(self) -> float | None:
        if self.count < 2:
            return None
        return self.m2 / (self.count - 1)

    def finalize(self) -> MomentSummary:
        if self.count == 0:
            return MomentSummary(0, None, None, None, None, None, None)
        variance = self.variance
        return MomentSummary(
            count=self.count,
            sum=self.sum,
            min=self.min,
            max=self.max,
            mean=self.mean,
            variance=variance,
            sd=math.sqrt(variance) if variance is not None else None,
        )
