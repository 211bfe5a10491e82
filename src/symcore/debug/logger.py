"""Records how long each simplify call took.

```
import symcore as sc
from symcore.debug.logger import Logger

logger = Logger()
x = sc.symbols("x")
sc.simplify((x + 1) ** 2 - x, logger=logger)

logger.dump()   # dumps information into simplify_log.txt
```

The logger rides along on the SimplifyConfig, so nothing global gets mutated.
"""

from typing import Dict, NamedTuple

from ..expr import Expr


class Datum(NamedTuple):
    expr: Expr
    time_spent: float
    iterations: int


class Logger:
    """Keeps track of time spent simplifying and how many passes it took."""

    _data: Dict[str, Datum] = None

    def __init__(self):
        self._data = {}

    def log(self, expr: Expr, time_spent: float, iterations: int):
        """Log a simplify entry.

        expr: the input to simplify
        time_spent: time taken to simplify expr, in seconds
        iterations: number of passes before reaching a fixed point (or giving up)
        """
        self._data[str(expr)] = Datum(expr, time_spent, iterations)

    @property
    def data(self) -> Dict[str, Datum]:
        return self._data

    def sort(self):
        """sorts the data by time spent on each expression, from most time to least time."""
        self._data = dict(sorted(self._data.items(), key=lambda x: x[1].time_spent, reverse=True))

    def dump(self, path: str = "simplify_log.txt"):
        self.sort()

        with open(path, "w") as f:
            f.write("Expression: time taken (s) [passes]")
            f.write("\n\n")
            for k, v in self._data.items():
                f.write(f"{k}: {v.time_spent} [{v.iterations}]\n")
