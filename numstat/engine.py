"""
Processing session: validate each input line, feed the moment accumulator and,
only when a buffering statistic was requested, the value buffer and frequency
table. Results are assembled once, after the input is exhausted.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable

from numstat import log
from numstat.ingest.validation import InvalidToken, OnInvalid, parse_token
from numstat.result import ResultRecord
from numstat.selection import StatRequest, format_rank
from numstat.streaming.accumulator import MomentAccumulator, MomentSummary
from numstat.streaming.order_stats import FrequencyTable, percentiles_of


class IngestResult(str, Enum):
    ACCEPTED = "accepted"
    REJECTED = "rejected"


@dataclass(frozen=True)
class EmptyInput:
    """No value was accepted; the caller prints nothing."""
    lines_read: int = 0


@dataclass(frozen=True)
class ValidationAborted:
    line_number: int
    token: str

    @property
    def message(self) -> str:
        return f"invalid value '{self.token}' on input line {self.line_number}"


@dataclass(frozen=True)
class Success:
    record: ResultRecord


RunOutcome = EmptyInput | ValidationAborted | Success


class StatsSession:
    """
    Owns all accumulation state for one run: create, ingest lines, finalize once.
    """
    def __init__(
        self,
        request: StatRequest,
        on_invalid: OnInvalid = OnInvalid.WARN,
        warn: Callable[[str], None] | None = None,
    ):
        self.request = request
        self.on_invalid = OnInvalid(on_invalid)
        self.warn = warn or log.warning
        self.accumulator = MomentAccumulator()
        self.needs_buffer = request.needs_buffer
        self.buffer: list[float] | None = [] if self.needs_buffer else None
        self.frequencies = FrequencyTable() if request.needs_frequencies else None
        self.lines_read = 0
        self.rejected = 0
        self._finalized = False

    def ingest(self, line: str, on_invalid: OnInvalid | None = None) -> IngestResult:
        """
        Validate one line and accumulate it. Under the abort policy an invalid
        line raises InvalidToken; otherwise it is skipped (with a warning for WARN).
        """
        if self._finalized:
            raise RuntimeError("session already finalized")
        policy = OnInvalid(on_invalid) if on_invalid is not None else self.on_invalid
        self.lines_read += 1
        value = parse_token(line)
        if value is None:
            self.rejected += 1
            token = line.strip()
            if policy is OnInvalid.ABORT:
                raise InvalidToken(token, self.lines_read)
            if policy is OnInvalid.WARN:
                self.warn(f"invalid value '{token}' on input line {self.lines_read}")
            return IngestResult.REJECTED

        self.accumulator.accept(value)
        if self.buffer is not None:
            self.buffer.append(value)
        if self.frequencies is not None:
            self.frequencies.add(value)
        return IngestResult.ACCEPTED

    def finalize(self) -> ResultRecord | None:
        """Build the result record, or None when no value was accepted."""
        if self._finalized:
            raise RuntimeError("session already finalized")
        self._finalized = True
        moments = self.accumulator.finalize()
        if moments.count == 0:
            self.buffer = None
            return None
        values = self._moment_values(moments)
        if self.buffer is not None:
            values.update(self._order_values(self.buffer))
            self.buffer = None
        if self.frequencies is not None:
            values["mode"] = self.frequencies.mode()
        return ResultRecord([(key, values[key]) for key in self.request.keys()])

    @staticmethod
    def _moment_values(moments: MomentSummary) -> dict[str, float | int | None]:
        return {
            "N": moments.count,
            "min": moments.min,
            "max": moments.max,
            "sum": moments.sum,
            "mean": moments.mean,
            "sd": moments.sd,
            "stderr": moments.stderr,
            "variance": moments.variance,
        }

    def _order_values(self, buffer: list[float]) -> dict[str, float]:
        # one sorted copy serves every requested rank
        named = {"q1": 25.0, "median": 50.0, "q3": 75.0}
        labels = []
        ranks = []
        for key in self.request.stats:
            if key in named:
                labels.append(key)
                ranks.append(named[key])
        for rank in self.request.percentiles:
            labels.append(format_rank(rank))
            ranks.append(rank)
        for k in self.request.quartiles:
            labels.append(f"q{k}")
            ranks.append(k * 25.0)
        if not ranks:
            return {}
        return dict(zip(labels, percentiles_of(buffer, ranks)))


def run_stats(
    lines: Iterable[str],
    request: StatRequest,
    on_invalid: OnInvalid = OnInvalid.WARN,
    warn: Callable[[str], None] | None = None,
) -> RunOutcome:
    """Consume every line, then return EmptyInput, ValidationAborted or Success."""
    session = StatsSession(request, on_invalid=on_invalid, warn=warn)
    log.log(
        f"buffering {'enabled' if session.needs_buffer else 'disabled'} for {', '.join(request.keys())}",
        "debug",
    )
    try:
        for line in lines:
            session.ingest(line)
    except InvalidToken as exc:
        return ValidationAborted(line_number=exc.line_number, token=exc.token)
    log.log(f"read {session.lines_read} lines, rejected {session.rejected}", "debug")
    record = session.finalize()
    if record is None:
        return EmptyInput(lines_read=session.lines_read)
    return Success(record)
