"""
Plan extraction and display.

After the search loop reaches a goal node, these utilities turn it into
a Plan: the actions in order plus the state after each of them.
When the loop halts without a goal, the result is a PlanNotFound that
says why. Both are returned, never raised; only a Plan is truthy.
"""

from dataclasses import dataclass
from typing import Optional

from .state import SearchState
from .bridge import sorted_facts


@dataclass
class Plan:
    actions: tuple = ()
    states: tuple = ()
    nodes_expanded: int = 0

    def __bool__(self):
        return True

    def __iter__(self):
        return iter(self.actions)

    def __len__(self):
        return len(self.actions)

    def __getitem__(self, i):
        return self.actions[i]

    @property
    def names(self) -> list:
        return [str(a) for a in self.actions]

    @property
    def final_state(self) -> frozenset:
        return self.states[-1] if self.states else frozenset()

    def __str__(self):
        if not self.actions:
            return "[]"
        return "[" + ", ".join(self.names) + "]"


@dataclass
class PlanNotFound:
    reason: str = ""
    nodes_expanded: int = 0
    bound: Optional[int] = None

    def __bool__(self):
        return False

    def __str__(self):
        return f"PlanNotFound({self.reason})"


def found_goal(search: SearchState) -> bool:
    """Stop condition: has a goal node been reached?"""
    return search.solution is not None


def extract_plan(search: SearchState):
    """
    Replay the solution node's actions from the initial state.
    Returns a Plan, or None if the search has no solution.
    """
    node = search.solution
    if node is None:
        return None
    states = [search.initial_state]
    for action in node.actions:
        states.append(action.apply(states[-1]))
    return Plan(actions=node.actions, states=tuple(states), nodes_expanded=search.step)


def print_plan(result, show_states=False):
    """Pretty-print a Plan, or the reason a PlanNotFound gives."""
    if not result:
        print(f"No plan found: {getattr(result, 'reason', 'no search result')}.")
        return
    print(f"\n{'='*60}")
    print(f"PLAN ({len(result)} steps, {result.nodes_expanded} nodes expanded)")
    print(f"{'='*60}")
    if not result.actions:
        print("  (empty: the goal holds in the initial state)")
    for i, action in enumerate(result.actions):
        print(f"  {i+1}. {action}")
        if show_states:
            facts = ", ".join(str(f) for f in sorted_facts(result.states[i + 1]))
            print(f"       state: {{{facts}}}")
    print(f"{'='*60}")
