# philosim

A simulation of the dining philosophers problem. Each philosopher runs in
its own thread. A commander walks through the philosophers in turn and lets
a thinking philosopher eat with a neighbour's fork, and an observer thread
watches for anyone who has gone too long without eating.

## Installation

```
pip install .
```

## Usage

```
philosim NUMBER_OF_PHILOSOPHERS TIME_TO_DIE TIME_TO_EAT TIME_TO_SLEEP [MUST_EAT_COUNT]
```

All times are in milliseconds. The simulation stops when a philosopher
dies, or, if `MUST_EAT_COUNT` is given, as soon as every philosopher has
eaten at least that many times.

Example:

```
philosim 5 800 200 200 7
```

Every event is written to standard output on its own line: the number of
milliseconds since the start of the run, the philosopher's number
(counted from 0), and the event:

```
0 0 is thinking
0 0 has taken a fork
0 0 has taken a fork
0 0 is eating
200 0 is sleeping
```

The events are `has taken a fork` (printed twice, once for each fork),
`is eating`, `is sleeping`, `is thinking` and `died`.

A lone philosopher has no neighbour to borrow a fork from, so with
`NUMBER_OF_PHILOSOPHERS` set to 1 it never eats and dies once
`TIME_TO_DIE` has passed.

## Arguments and exit status

Every argument must be a decimal integer, optionally signed, that fits in
32 bits. The philosopher count must be at least 1 and the other values must
not be negative. `TIME_TO_EAT` and `TIME_TO_SLEEP` are also rejected when
they are too large to hold in 32 bits as microseconds (above 2147483).

The command exits with status 0 after a run. If the arguments are invalid
it prints a message to standard error and exits with status 10
(`ExitCode.INIT_INFO` in `philosim.params`).

## Library use

```python
import sys

from philosim.params import parse_params
from philosim.simulation import Simulation

params = parse_params(["4", "410", "200", "200", "3"])
with Simulation(params, sys.stdout) as sim:
    sim.run()
```

- `philosim.params.parse_params(args)` takes the arguments that follow the
  program name and returns a `Params`. In it `die` is in milliseconds,
  `eat` and `sleep` in microseconds, and `must_eat_count` is -1 when no
  limit was given. Invalid arguments raise `ParamError`, whose `code`
  attribute holds the matching `ExitCode`.
- `philosim.simulation.Simulation(params, stream=None)` starts the
  philosophers' threads at once. `run()` starts the observer, directs the
  philosophers until the simulation stops and returns `ExitCode.SUCCESS`;
  `close()` (called on leaving the `with` block) stops and joins the
  threads. Messages go to `stream`, or to standard output when it is
  `None`.
- `philosim.output` formats and writes the event lines (`Event`,
  `format_event`, `report`), and `philosim.sequential.Sequential` is the
  ordered queue with a cursor that the commander uses to take turns.