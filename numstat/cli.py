import argparse
import sys

from numstat import log
from numstat.config import load_config
from numstat.engine import EmptyInput, Success, ValidationAborted, run_stats
from numstat.ingest import FileLineSource, policy_from_flags
from numstat.report import OutputFormat, check_number_format, render_json, render_table
from numstat.selection import resolve_request

__version__ = "0.1.0"


class NumstatError(Exception):
    def __init__(self, message, code):
        super().__init__(message)
        self.code = code


EXIT_OK = 0
EXIT_UNKNOWN = 1
EXIT_PARSE = 2
EXIT_INVALID_INPUT = 3
EXIT_NOT_FOUND = 4


_STAT_FLAGS = [
    (["--N", "-n", "--count"], "N", "number of values"),
    (["--min"], "min", "minimum"),
    (["--max"], "max", "maximum"),
    (["--sum", "-s"], "sum", "sum"),
    (["--mean", "--avg", "-m"], "mean", "arithmetic mean"),
    (["--sd", "--stddev"], "sd", "sample standard deviation"),
    (["--stderr", "--sem"], "stderr", "standard error of the mean"),
    (["--variance", "--var"], "variance", "sample variance"),
    (["--median"], "median", "median"),
    (["--mode"], "mode", "most frequent value (empty if tied)"),
    (["--q1"], "q1", "first quartile"),
    (["--q3"], "q3", "third quartile"),
    (["--default"], "default", "N min max sum mean sd"),
    (["--summary"], "summary", "five-number summary: min q1 median q3 max"),
    (["--complete"], "complete", "N min q1 median q3 max sum mean sd stderr variance"),
]


def _unescape(text):
    return text.replace("\\t", "\t").replace("\\n", "\n")


def build_parser():
    parser = argparse.ArgumentParser(
        prog="numstat",
        description="Descriptive statistics for a stream of numbers, one per line.",
    )
    parser.add_argument("files", nargs="*", help="input files (default: stdin, '-' for stdin)")

    stats_group = parser.add_argument_group("statistics")
    for flags, name, help_text in _STAT_FLAGS:
        stats_group.add_argument(*flags, dest="stats", action="append_const", const=name, help=help_text)
    stats_group.add_argument(
        "--percentile", "-p", type=float, action="append", default=None, metavar="P",
        help="percentile P in [0, 100]; repeatable",
    )
    stats_group.add_argument(
        "--quartile", type=int, action="append", default=None, metavar="K",
        help="quartile K in 0..4; repeatable",
    )

    output_group = parser.add_argument_group("output")
    output_group.add_argument("--delimiter", "-d", default=None, help="column delimiter (default: tab)")
    output_group.add_argument("--format", "-f", dest="number_format", default=None, help="printf-style numeric format (default: %%g)")
    output_group.add_argument("--no-header", "--nh", dest="header", action="store_false", default=None, help="do not print statistic names")
    output_group.add_argument("--transpose-output", "--tn", dest="transpose", action="store_true", default=None, help="one statistic per line")
    output_group.add_argument("--na-rep", default=None, help="text printed for undefined statistics")
    output_group.add_argument("--json", action="store_true", help="print the result as JSON")

    input_group = parser.add_argument_group("input")
    input_group.add_argument("--strict", action="store_true", default=None, help="abort on the first invalid line")
    input_group.add_argument("--quiet", "-q", action="store_true", default=None, help="skip invalid lines without a warning")

    parser.add_argument("--verbose", "-v", action="store_true", help="verbose logging")
    parser.add_argument("--config", default=None, help="YAML defaults file (default: $NUMSTAT_CONFIG or ~/.numstat.yaml)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def apply_config(args, config):
    """Fill every option left unset on the command line from the config."""
    if not args.stats and not args.percentile and not args.quartile:
        args.stats = list(config["stats"])
        args.percentile = list(config["percentiles"])
        args.quartile = list(config["quartiles"])
    if args.delimiter is None:
        args.delimiter = config["delimiter"]
    if args.number_format is None:
        args.number_format = config["format"]
    if args.header is None:
        args.header = config["header"]
    if args.transpose is None:
        args.transpose = config["transpose"]
    if args.na_rep is None:
        args.na_rep = config["na_rep"]
    if args.strict is None:
        args.strict = config["strict"]
    if args.quiet is None:
        args.quiet = config["quiet"]
    return args


def compute(args, stdin=None):
    """
    Run one statistics pass for parsed arguments. Returns the rendered output,
    or None for empty input. Raises NumstatError for every failure.
    """
    try:
        config = load_config(args.config)
    except FileNotFoundError as exc:
        raise NumstatError(f"config not found: {exc.filename}", EXIT_PARSE) from exc
    except (ValueError, TypeError, OSError) as exc:
        raise NumstatError(f"invalid config: {exc}", EXIT_PARSE) from exc
    apply_config(args, config)

    # configuration errors surface before any input is read
    try:
        request = resolve_request(args.stats, args.percentile, args.quartile)
        number_format = check_number_format(args.number_format)
    except ValueError as exc:
        raise NumstatError(str(exc), EXIT_PARSE) from exc
    if args.delimiter == "":
        raise NumstatError("delimiter must not be empty", EXIT_PARSE)
    fmt = OutputFormat(
        delimiter=_unescape(args.delimiter),
        number_format=number_format,
        header=args.header,
        transpose=args.transpose,
        na_rep=args.na_rep,
    )
    policy = policy_from_flags(quiet=args.quiet, strict=args.strict)

    source = FileLineSource(args.files, stdin=stdin)
    try:
        with source:
            outcome = run_stats(source.lines(), request, on_invalid=policy)
    except FileNotFoundError as exc:
        raise NumstatError(str(exc), EXIT_NOT_FOUND) from exc
    except OSError as exc:
        raise NumstatError(f"cannot read input: {exc}", EXIT_NOT_FOUND) from exc

    if isinstance(outcome, ValidationAborted):
        raise NumstatError(outcome.message, EXIT_INVALID_INPUT)
    if isinstance(outcome, EmptyInput):
        log.log(f"no valid values in {outcome.lines_read} lines", "debug")
        return None
    if isinstance(outcome, Success):
        if args.json:
            return render_json(outcome.record)
        return render_table(outcome.record, fmt)
    raise NumstatError(f"unexpected outcome: {outcome!r}", EXIT_UNKNOWN)


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        log.set_log_level("debug")
    elif args.quiet:
        log.set_log_level("error")
    else:
        log.set_log_level("warning")

    try:
        output = compute(args)
        if output is not None:
            sys.stdout.write(output)
    except NumstatError as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(exc.code)
    except Exception as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(EXIT_UNKNOWN)
    sys.exit(EXIT_OK)


if __name__ == "__main__":
    main()
