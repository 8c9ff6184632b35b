"""
Problem registry.

Each entry is a dict describing how to set up a planning run:
    make_problem:  () -> PlanningProblem
    bound:         default depth bound for plan()
    strategy:      default node-selection strategy   [optional]
    planner:       "search" (default) or "llm"        [optional]
    description:   str
"""

from .romania import make_romania_problem, make_romania_roads_problem
from .air_cargo import make_air_cargo_problem
from .spare_tire import make_spare_tire_problem
from .blocks_world import make_three_block_tower_problem
from .cake import make_have_cake_problem


PROBLEMS = {
    "romania": {
        "make_problem": make_romania_problem,
        "bound":        1,
        "description":  "Romania map: fly straight from Sibiu to Bucharest",
    },
    "romania_roads": {
        "make_problem": make_romania_roads_problem,
        "bound":        5,
        "description":  "Romania map: drive from Sibiu to Bucharest over direct roads",
    },
    "air_cargo": {
        "make_problem": make_air_cargo_problem,
        "bound":        6,
        "description":  "Air cargo: swap two cargoes between SFO and JFK",
    },
    "spare_tire": {
        "make_problem": make_spare_tire_problem,
        "bound":        4,
        "description":  "Spare tire: take off the flat, put on the spare",
    },
    "three_block_tower": {
        "make_problem": make_three_block_tower_problem,
        "bound":        4,
        "strategy":     "astar",
        "description":  "Blocks world: build the tower A on B on C",
    },
    "have_cake": {
        "make_problem": make_have_cake_problem,
        "bound":        3,
        "description":  "Have cake and eat it too: negative preconditions",
    },
    "llm": {
        "make_problem": make_romania_roads_problem,
        "bound":        5,
        "planner":      "llm",
        "description":  "Claude proposes a Romania route; the simulator checks it",
    },
}
