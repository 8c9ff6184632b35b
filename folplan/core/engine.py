"""
The search main loop.

Same shape as a given-clause loop: pick a node from the frontier, test
it against the goal, expand it, add the new nodes back to the frontier.
Which node to pick is entirely pluggable -- FIFO (the default) makes the
loop breadth-first, which returns a shortest plan by action count.
"""

import time
from typing import Callable, Optional

from .state import Node, SearchState


def search_step(
    search: SearchState,
    problem,
    choose_node_fn: Optional[Callable] = None,
    prune_fn: Optional[Callable] = None,
    bound: Optional[int] = None,
    verbose: bool = True,
) -> SearchState:
    """
    Execute one step of the search loop.

    One step = pick a node, halt if it satisfies the goal, otherwise push
    every successor whose state has not been reached at an equal or
    smaller depth.

    Args:
        search:          current SearchState
        problem:         anything with goal_test(state) and successors(state)
        choose_node_fn:  choose_node_fn(frontier) -> node
                         Default: FIFO (breadth-first).
        prune_fn:        prune_fn(node, search) -> bool
                         Should we discard this new node? Default: no pruning.
        bound:           nodes at this depth are goal-tested but not expanded.
        verbose:         print progress.
    """
    if not search.frontier:
        search.halted = True
        search.halt_reason = "frontier empty"
        return search

    if choose_node_fn:
        node = choose_node_fn(search.frontier)
        search.frontier.remove(node)
    else:
        node = search.frontier.popleft()

    search.step += 1
    if verbose:
        print(f"\n--- Step {search.step}: Expand [depth {node.depth}] {node.name} ---")

    if problem.goal_test(node.state):
        search.solution = node
        search.halted = True
        search.halt_reason = "goal reached"
        search.history.append({
            "step": search.step,
            "node": node.name,
            "depth": node.depth,
            "produced": [],
            "goal": True,
            "frontier_size": len(search.frontier),
        })
        if verbose:
            print(f"  [goal] {node.name}")
        return search

    new_nodes = []

    if bound is not None and node.depth >= bound:
        if verbose:
            print(f"  [bound] depth {node.depth} reached, not expanded")
    else:
        for action, next_state in problem.successors(node.state):
            depth = node.depth + 1
            if search.seen.get(next_state, depth + 1) <= depth:
                continue
            search.seen[next_state] = depth

            child = Node(next_state, node.actions + (action,), step=search.step)
            if prune_fn and prune_fn(child, search):
                if verbose:
                    print(f"  [pruned] {action}")
                continue

            new_nodes.append(child)
            if verbose:
                print(f"  [new] {action}")

    search.frontier.extend(new_nodes)

    search.history.append({
        "step": search.step,
        "node": node.name,
        "depth": node.depth,
        "produced": [str(n.actions[-1]) for n in new_nodes],
        "goal": False,
        "frontier_size": len(search.frontier),
    })

    if verbose:
        print(f"  Frontier: {len(search.frontier)} | Seen: {len(search.seen)}")

    return search


def run_search(
    search: SearchState,
    problem,
    max_nodes: int = 10_000,
    max_seconds: Optional[float] = None,
    stop_fn: Optional[Callable] = None,
    save_path: Optional[str] = None,
    **kwargs,
) -> SearchState:
    """
    Run the search loop until halted, stop condition met, or a limit is hit.

    Args:
        search:      initial (or resumed) SearchState
        problem:     the planning problem
        max_nodes:   safety limit on expanded nodes, counted across resumes
        max_seconds: wall-clock limit, checked between steps
        stop_fn:     stop_fn(search) -> bool; halt early if True
        save_path:   if set, checkpoint the search after each step
        **kwargs:    passed through to search_step
    """
    started = time.monotonic()
    while search.step < max_nodes:
        if search.halted:
            break
        if stop_fn and stop_fn(search):
            search.halted = True
            search.halt_reason = "stop condition met"
            break
        if max_seconds is not None and time.monotonic() - started > max_seconds:
            search.halted = True
            search.halt_reason = "time limit exceeded"
            break
        search = search_step(search, problem, **kwargs)
        if save_path:
            search.save(save_path)
    # the last permitted step may also have emptied the frontier
    if not search.halted and not search.frontier:
        search.halted = True
        search.halt_reason = "frontier empty"
        if save_path:
            search.save(save_path)
    return search
