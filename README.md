# bnsl

Score-based Bayesian network structure learning with a bound on the number of
arcs and the number of root nodes. The search works over variable orderings:
each ordering is scored by a dynamic program that picks a parent set for every
variable from the variables placed before it, using at most the allowed number
of arcs and exactly the required number of roots. Orderings are improved by
insert-move hill climbing inside a genetic algorithm with order-based, cycle or
rank crossover.

## Installation

```
pip install .
```

The package has no dependencies outside the standard library. Tests use
pytest (`pip install .[test]`).

## Instance files

An instance file lists, for every variable, its candidate parent sets with
their scores, all separated by whitespace:

```
<n>
<var id> <number of parent sets>
<score> <parent set size> <parent> <parent> ...
...
```

Scores are read as decimals and stored as integers multiplied by -1,000,000,
so lower is better. Every variable id from 0 to n-1 must appear, and each
variable needs a candidate with no parents. `Instance.load` and
`Instance.from_text` raise `ValueError` on malformed data.

An instance read from a file allows at most 80 arcs and exactly 1 root. Other
limits can be set by building an `Instance` directly from its variables:
`Instance(variables, num_arcs=..., num_roots=...)`.

## Command line

```
bnsl-search <instance-file> <cutoff seconds> <seed> <output file> [options]
```

With fewer than four arguments the usage text is printed. A seed of `-1`
seeds from the current time. Options:

- `-populationsize N` population size (default 20)
- `-crossover N` crossovers per generation (default 20)
- `-nummutation N` mutations per generation (default 6)
- `-divlookahead N` generations compared before diversifying (default 32)
- `-numkeep N` specimens kept when diversifying (default 4)
- `-divtolerance X` relative change in average fitness below which the
  population is diversified (default 0.001, `-1` disables)
- `-greediness N` build initial orderings greedily, choosing among the N
  cheapest placeable variables (default `-1`: random orderings)
- `-crossovertype OB|CX|RK` (default OB; any other value selects CX)
- `-powerfactor X` random swaps per mutation as a fraction of the number of
  variables, rounded up (default 0.01)

Progress is printed while the search runs until the cutoff time is reached.
At the end the best ordering is printed with the parent set chosen for each
variable and a validity check, and the output file receives the instance file
name, the command-line arguments one per line, and every improvement with its
time in milliseconds, its score and its ordering.

## Library use

```python
import random

from bnsl.instance import Instance
from bnsl.ordering import Ordering
from bnsl.search import LocalSearch

instance = Instance.load("network.txt")
search = LocalSearch(instance, random.Random(1))
result = search.hill_climb(Ordering.random(instance, random.Random(1)))
print(result.score, result.ordering)
```

- `bnsl.scoring.OrderingScorer` holds the scoring dynamic program:
  `score_with_memo`, `score_with_parents` (score plus the chosen parent set of
  every variable) and incremental evaluation of adjacent swaps and insert
  moves.
- `bnsl.search.LocalSearch` adds `hill_climb`, `genetic`, `check_solution`
  and `depth_sort`.
- `bnsl.population` has the `Population` class and the crossover functions
  `crossover_ob`, `crossover_cx` and `crossover_rk`.
- `bnsl.register.ResultRegister` records improvements with timestamps and
  writes them to a file.
- `bnsl.tabu` has bounded tabu lists of orderings (`TabuList`), placements
  (`MoveTabuList`) and swaps (`SwapTabuList`).

Randomised functions take an optional `random.Random`; without one they use
the `random` module.

## What it does not do

The package does not compute local scores from data: it needs an instance
file of precomputed parent-set scores. It outputs orderings and the parent
sets chosen for them, not a network in any graph file format. The arc and
root limits cannot be set from the command line.