"""
Forward state-space planning.

plan() is a thin driver around the search loop in core.engine: it seeds
a SearchState with the problem's initial state, picks a node-selection
strategy, runs the loop under the caps, and turns the outcome into a
Plan or a PlanNotFound.

Strategies are choose_node_fn(frontier) -> node functions, the same
pluggable slot the loop has always had:

    breadth_first   FIFO (the loop's default); shortest plan by action count
    depth_first     LIFO, still cut off by the depth bound
    astar           depth + h_max from the relaxed planning graph
    interactive     a human picks the next node
"""

from typing import Callable, Optional

from ..core.state import SearchState
from ..core.engine import run_search
from ..core.plan import PlanNotFound, extract_plan
from .graph import PlanningGraph, h_max


def expand(problem, state) -> list:
    """(action, next_state) for every ground action applicable in state."""
    return problem.successors(state)


def depth_first(frontier):
    return frontier[-1]


def heuristic(problem) -> Callable:
    """A cached state -> h_max function. None means the goals are unreachable."""
    cache = {}

    def h(state):
        if state not in cache:
            cache[state] = h_max(problem, state)
        return cache[state]

    return h


def make_astar_chooser(problem):
    """
    Returns (choose_node_fn, prune_fn) for A* ordering on f = depth + h_max.
    Ties go to the node generated first. States from which the goals are
    unreachable are pruned as soon as they are generated.
    """
    h = heuristic(problem)

    def choose(frontier):
        return min(frontier, key=lambda node: node.depth + h(node.state))

    def prune(node, search):
        return h(node.state) is None

    return choose, prune


def _interactive():
    from ..domains.interactive import interactive_choose_node
    return interactive_choose_node


STRATEGIES = {
    "breadth_first": lambda problem: (None, None),
    "depth_first":   lambda problem: (depth_first, None),
    "astar":         make_astar_chooser,
    "interactive":   lambda problem: (_interactive(), None),
}


def _strategy(problem, strategy):
    if callable(strategy):
        return strategy, None
    if strategy not in STRATEGIES:
        raise ValueError(
            f"unknown strategy {strategy!r}; choose from {sorted(STRATEGIES)}")
    return STRATEGIES[strategy](problem)


def plan(
    problem,
    bound: int = 10,
    max_nodes: int = 10_000,
    max_seconds: Optional[float] = None,
    strategy="breadth_first",
    verbose: bool = False,
    search: Optional[SearchState] = None,
    save_path: Optional[str] = None,
):
    """
    Search for a sequence of at most bound ground actions that takes the
    initial state to one satisfying the goal test.

    Returns a Plan (possibly empty, if the goal holds initially) or a
    PlanNotFound giving the reason. Pass search= to resume a checkpoint.
    """
    if bound < 0:
        raise ValueError(f"bound must be non-negative, got {bound}")
    choose_node_fn, prune_fn = _strategy(problem, strategy)

    if search is None:
        search = SearchState.start(problem.initial_state)
    if (search.step == 0 and problem.goals is not None
            and not problem.goal_test(search.initial_state)):
        graph = PlanningGraph(problem, search.initial_state)
        if graph.goal_level(problem.goals) is None:
            search.halted = True
            search.halt_reason = "goal unreachable"
            if verbose:
                print(f"  [unreachable] relaxed graph leveled off after {len(graph)} layers")
            return PlanNotFound(reason="goal unreachable", nodes_expanded=0, bound=bound)

    search = run_search(
        search, problem,
        max_nodes=max_nodes,
        max_seconds=max_seconds,
        save_path=save_path,
        choose_node_fn=choose_node_fn,
        prune_fn=prune_fn,
        bound=bound,
        verbose=verbose,
    )
    return result_of(search, bound, max_nodes)


def result_of(search: SearchState, bound: int, max_nodes: int):
    """The Plan found by a halted search, or why there is none."""
    found = extract_plan(search)
    if found is not None:
        return found
    if search.halt_reason == "frontier empty":
        reason = f"no plan found within bound {bound}"
    elif search.halt_reason == "time limit exceeded":
        reason = "time limit exceeded"
    elif not search.halted:
        reason = f"node limit {max_nodes} exceeded"
    else:
        reason = search.halt_reason
    return PlanNotFound(reason=reason, nodes_expanded=search.step, bound=bound)

