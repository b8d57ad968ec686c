import json
import math
from dataclasses import dataclass

from numstat.result import ResultRecord


@dataclass
class OutputFormat:
    delimiter: str = "\t"
    number_format: str = "%g"
    header: bool = True
    transpose: bool = False
    na_rep: str = ""


def check_number_format(number_format: str) -> str:
    try:
        number_format % 1.0
    except (TypeError, ValueError) as exc:
        raise ValueError(f"invalid numeric format {number_format!r}: {exc}") from exc
    return number_format


def format_value(key, value, fmt: OutputFormat) -> str:
    if value is None:
        return fmt.na_rep
    if key == "N":
        return str(int(value))
    if not math.isfinite(value):
        return "%g" % value
    return fmt.number_format % value


def render_table(record: ResultRecord, fmt: OutputFormat | None = None) -> str:
    """Header line plus one line of values, or one statistic per line when transposed."""
    fmt = fmt or OutputFormat()
    keys = list(record)
    cells = [format_value(key, record[key], fmt) for key in keys]
    if fmt.transpose:
        if fmt.header:
            lines = [f"{key}{fmt.delimiter}{cell}" for key, cell in zip(keys, cells)]
        else:
            lines = cells
        return "\n".join(lines) + "\n"
    lines = []
    if fmt.header:
        lines.append(fmt.delimiter.join(keys))
    lines.append(fmt.delimiter.join(cells))
    return "\n".join(lines) + "\n"


def render_json(record: ResultRecord) -> str:
    return json.dumps(record.to_dict(), indent=2) + "\n"
