"""Command-line entry point for the genetic ordering search."""

from __future__ import annotations

import math
import random
import re
import sys
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from .instance import Instance
from .population import CrossoverType
from .register import ResultRegister
from .search import LocalSearch

USAGE = (
    "Command without optional arguments\n\n"
    "\tbnsl <instance-file> <cutofftime (seconds)> <seed> <output file>\n\n"
    "If <seed> is -1, the current time will be used as the seed.\n"
    "Full command (with all optional arguments): \n\n"
    "\tbnsl <instance-file> <cutofftime> <seed> <output file> -populationsize <pop size>\n"
    "\t-crossover <# of crossovers> -nummutation <# of mutations>\n"
    "\t-divlookahead <n> -numkeep <n> -divtolerance <x> -greediness <n>\n"
    "\t-crossovertype <OB|CX|RK> -powerfactor <x>\n\n"
    "By default, the tuned parameters are used.\n"
    "The result is printed to standard output at the end and a file with progress is dumped.\n"
)

# Options are only looked for among the arguments up to this position.
_OPTION_LIMIT = 21
_POSITIONAL = 4

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


class UsageError(ValueError):
    """The command line cannot be used."""


def _atoi(text: str) -> int:
    """Leading integer of ``text``, or 0 when there is none."""
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def _atof(text: str) -> float:
    """Leading real number of ``text``, or 0.0 when there is none."""
    match = _FLOAT_PREFIX.match(text)
    return float(match.group(1)) if match else 0.0


def _crossover(text: str) -> CrossoverType:
    if text == "OB":
        return CrossoverType.OB
    if text == "RK":
        return CrossoverType.RK
    return CrossoverType.CX


@dataclass
class Options:
    """Settings of one search run."""

    instance_file: str
    cutoff_time: float
    seed: int
    out_file: str
    population_size: int = 20
    num_crossovers: int = 20
    num_mutations: int = 6
    div_lookahead: int = 32
    num_keep: int = 4
    div_tolerance: float = 0.001
    greediness: int = -1
    crossover_type: CrossoverType = CrossoverType.OB
    power_factor: float = 0.01

    def mutation_power(self, n: int) -> int:
        """Number of random swaps per mutation for ``n`` variables."""
        return math.ceil(n * self.power_factor)


_FLAGS: dict[str, tuple[str, Callable[[str], object]]] = {
    "-populationsize": ("population_size", _atoi),
    "-crossover": ("num_crossovers", _atoi),
    "-nummutation": ("num_mutations", _atoi),
    "-divlookahead": ("div_lookahead", _atoi),
    "-numkeep": ("num_keep", _atoi),
    "-divtolerance": ("div_tolerance", _atof),
    "-greediness": ("greediness", _atoi),
    "-crossovertype": ("crossover_type", _crossover),
    "-powerfactor": ("power_factor", _atof),
}


def parse_args(argv: Sequence[str]) -> Options:
    """Build options from the arguments that follow the program name."""
    args = list(argv)
    if len(args) < _POSITIONAL:
        raise UsageError("expected <instance-file> <cutofftime> <seed> <output file>")
    options = Options(
        instance_file=args[0],
        cutoff_time=_atof(args[1]),
        seed=_atoi(args[2]),
        out_file=args[3],
    )
    for i in range(_POSITIONAL, min(_OPTION_LIMIT, len(args))):
        flag = _FLAGS.get(args[i])
        if flag is None:
            continue
        if i + 1 >= len(args):
            raise UsageError(f"option {args[i]} needs a value")
        attr, convert = flag
        setattr(options, attr, convert(args[i + 1]))
    return options


def main(argv: Sequence[str] | None = None) -> int:
    """Run the search described by ``argv`` and write its progress file."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        options = parse_args(args)
    except UsageError:
        sys.stderr.write(USAGE)
        return 0

    seed = int(time.time()) if options.seed == -1 else options.seed
    rng = random.Random(seed)
    register = ResultRegister()
    try:
        instance = Instance.load(options.instance_file)
    except (OSError, ValueError) as exc:
        print(f"Could not read instance {options.instance_file}: {exc}", file=sys.stderr)
        return 1
    register.set_origin()
    register.set()

    search = LocalSearch(instance, rng)
    result = search.genetic(
        options.cutoff_time,
        options.population_size,
        options.num_crossovers,
        options.num_mutations,
        options.mutation_power(instance.n),
        options.div_lookahead,
        options.num_keep,
        options.div_tolerance,
        options.crossover_type,
        options.greediness,
        register,
    )
    search.check_solution(result.ordering)
    register.dump(options.out_file, options.instance_file, args)
    return 0


if __name__ == "__main__":
    sys.exit(main())