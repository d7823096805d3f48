"""spider_rectgen.cli

Command-line interface.

    spider-rectgen [options] <distribution> <cardinality> <dimensions> [distribution specific parameters]

Writes one ``POLYGON ((...))`` line per generated rectangle to stdout.

Options may appear anywhere on the line. Every other token is a positional
value, including ones that start with ``-`` (``-1e-3``, ``-abc``), and is
parsed leniently by :func:`parse_number`.
"""

from __future__ import annotations

import argparse
import logging
import re
import sys
from typing import List, Optional, Sequence, Tuple

from .config import CLI_ARITY, ConfigurationError, GeneratorConfig, get_distribution, list_distributions, make_generator
from .wkt import write_polygons

logger = logging.getLogger(__name__)

PROG = "spider-rectgen"

USAGE = f"""\
Usage: {PROG} <distribution> <cardinality> <dimensions> [distribution specific parameters]
The available distributions are: {{uniform, diagonal, gaussian, sierpinsky, bit, parcel}}
cardinality: The number of records to generate
dimensions: The dimensionality of the generated geometries. Currently, only two-dimensional data is supported.
Distribution specific parameters:
  uniform    <max_width> <max_height>
  diagonal   <max_width> <max_height> <percentage> <buffer>
  gaussian   <max_width> <max_height>
  sierpinsky <max_width> <max_height>
  bit        <max_width> <max_height> <bias> <digits>
  parcel     <r> <alpha>"""

# Smallest command line: distribution, cardinality, dimensions and two parameters.
MIN_ARGS = 5

VALUE_OPTIONS = ("--seed", "-o", "--output")
FLAG_OPTIONS = ("--strict", "-v", "--verbose", "-h", "--help")

_NUMBER = re.compile(r"\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


class UsageError(Exception):
    """Bad command line; reported with the usage text and exit status 1."""


class _OptionParser(argparse.ArgumentParser):
    def error(self, message):
        raise UsageError(message)


def parse_number(token: str) -> float:
    """Parse the leading number in ``token``; 0.0 if there is none."""
    m = _NUMBER.match(token)
    if m is None:
        return 0.0
    return float(m.group(0))


def split_argv(argv: Sequence[str]) -> Tuple[List[str], List[str]]:
    """Separate known options (with their values) from positional tokens.

    A value option swallows the next token. Everything after ``--`` is
    positional.
    """
    options: List[str] = []
    positionals: List[str] = []
    tokens = iter(argv)
    for token in tokens:
        if token == "--":
            positionals.extend(tokens)
            break
        name = token.split("=", 1)[0]
        if name in VALUE_OPTIONS:
            options.append(token)
            if "=" not in token:
                value = next(tokens, None)
                if value is None:
                    raise UsageError(f"option {token} expects a value")
                options.append(value)
        elif token in FLAG_OPTIONS:
            options.append(token)
        else:
            positionals.append(token)
    return options, positionals


def build_parser() -> argparse.ArgumentParser:
    parser = _OptionParser(
        prog=PROG,
        usage="%(prog)s [options] <distribution> <cardinality> <dimensions> [params...]",
        description="Generate synthetic rectangle datasets as WKT polygons. "
        "Distributions: " + ", ".join(list_distributions()) + ".",
    )
    parser.add_argument("--seed", type=int, default=None, help="seed for the random source")
    parser.add_argument("--strict", action="store_true", help="reject out-of-range parameters")
    parser.add_argument("-o", "--output", default=None, help="write polygons to this file instead of stdout")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging on stderr")
    return parser


def config_from_args(positionals: Sequence[str], *, seed=None, strict=False) -> GeneratorConfig:
    if len(positionals) < MIN_ARGS:
        raise UsageError("not enough arguments")
    distribution, values = positionals[0], positionals[1:]
    try:
        spec = get_distribution(distribution)
    except ConfigurationError as e:
        raise UsageError(str(e)) from e

    numbers = [parse_number(v) for v in values][: CLI_ARITY[spec.name]]
    if len(numbers) < spec.arity:
        raise UsageError(
            f"{spec.name} expects {spec.arity} values after the distribution name; got {len(numbers)}"
        )
    # Cardinality stays a float: the generators loop while count < cardinality.
    return GeneratorConfig(
        distribution=spec.name,
        cardinality=numbers[0],
        dimensions=int(numbers[1]),
        params=tuple(numbers[2:]),
        seed=seed,
        strict=strict,
    )


def main(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    try:
        options, positionals = split_argv(argv)
        args = build_parser().parse_args(options)
    except UsageError as e:
        print(f"{PROG}: {e}", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )

    try:
        config = config_from_args(positionals, seed=args.seed, strict=args.strict)
    except UsageError as e:
        if positionals:
            print(f"{PROG}: {e}", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return 1

    try:
        generator = make_generator(config)
    except ConfigurationError as e:
        logger.error("Error: %s", e)
        return 1

    rects = generator.generate()
    if args.output is None:
        count = write_polygons(rects, sys.stdout)
    else:
        with open(args.output, "w", encoding="utf-8") as f:
            count = write_polygons(rects, f)
    logger.debug("wrote %d polygons", count)
    return 0


if __name__ == "__main__":
    sys.exit(main())
