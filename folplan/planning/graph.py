"""
Relaxed planning graph.

The layered forward expansion of GraphPlan, without mutexes: layer 0 is
a state, and each new layer adds the add-effects of every action whose
positive preconditions hold in the previous one. Deletions and negative
preconditions are ignored, so layers only grow and the graph levels off.

The first layer at which a fact appears is a lower bound on the number
of actions needed to make it true. The largest such level over a set of
goals (h_max) is an admissible heuristic, and a goal that never appears
is unreachable from the state.
"""

from typing import Optional

from ..core.expr import Operator
from ..core.kb import satisfy
from .action import groundings, index_facts


class PlanningGraph:

    def __init__(self, problem, state):
        self.problem = problem
        self.layers = [frozenset(state)]
        self._level = {f: 0 for f in self.layers[0]}
        self.leveled_off = False
        # Predicates some rule can derive: actions alone cannot bound them.
        self._derived = {r.consequent.key for r in problem.rules}

    def __len__(self):
        return len(self.layers)

    def expand(self) -> bool:
        """Add one layer. Returns False once the graph has leveled off."""
        if self.leveled_off:
            return False
        current = self.layers[-1]
        index = index_facts(current)
        added = set()
        for schema in self.problem.actions:
            for action in groundings(schema, current, self.problem.kb, index):
                for f in action.effect_add:
                    if f not in current:
                        added.add(f)
        if not added:
            self.leveled_off = True
            return False
        level = len(self.layers)
        for f in added:
            self._level[f] = level
        self.layers.append(current | added)
        return True

    def expand_until_leveled(self):
        while self.expand():
            pass
        return self

    def level_of(self, fact: Operator) -> Optional[int]:
        """First layer containing fact, expanding as needed. None if never."""
        while fact not in self._level and self.expand():
            pass
        return self._level.get(fact)

    def _goal_level(self, goal: Operator) -> Optional[int]:
        if goal.key in self._derived:
            return 0
        level = 0
        while True:
            for _ in satisfy((goal,), index_facts(self.layers[level])):
                return level
            level += 1
            if level >= len(self.layers) and not self.expand():
                return None

    def goal_level(self, goals) -> Optional[int]:
        """h_max over goals, or None if some goal is unreachable."""
        if isinstance(goals, Operator):
            goals = (goals,)
        worst = 0
        for g in goals:
            level = self._goal_level(g)
            if level is None:
                return None
            worst = max(worst, level)
        return worst


def h_max(problem, state) -> Optional[int]:
    """Relaxed-graph estimate of the actions still needed to reach problem.goals."""
    if problem.goals is None:
        return 0
    return PlanningGraph(problem, state).goal_level(problem.goals)
