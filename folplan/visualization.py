"""
Visualization and reporting utilities.
"""

from .core.state import SearchState
from .core.bridge import sorted_facts
from .core.plan import print_plan


def print_problem(problem):
    """Print the initial state, rules, actions and goal of a problem."""
    print(f"\n{'='*60}")
    print(f"Problem: {problem.name or '(unnamed)'}")
    print(f"Initial state ({len(problem.initial_state)}):")
    for f in sorted_facts(problem.initial_state):
        print(f"  {f}")
    if problem.rules:
        print(f"Rules ({len(problem.rules)}):")
        for r in problem.rules:
            print(f"  {r}")
    print(f"Actions ({len(problem.actions)}):")
    for a in problem.actions:
        print(f"  {a}")
    if problem.goals is not None:
        print("Goal: " + " & ".join(str(g) for g in problem.goals))
    print(f"{'='*60}")


def print_search(search: SearchState):
    """Print a summary of the current search state."""
    print(f"\n{'='*60}")
    print(f"Step: {search.step}")
    status = search.halt_reason if search.halted else "running"
    print(f"Status: {status}")
    print(f"Frontier ({len(search.frontier)}):")
    for node in search.frontier:
        print(f"  [depth {node.depth}] {node.name}")
    print(f"Seen states: {len(search.seen)}")
    print(f"{'='*60}")


def print_history(search: SearchState):
    """Print the expansion history."""
    print(f"\n{'='*60}")
    print("Expansion history:")
    print(f"{'='*60}")
    for entry in search.history:
        if entry["goal"]:
            produced = "GOAL"
        elif entry["produced"]:
            produced = ", ".join(entry["produced"])
        else:
            produced = "(nothing new)"
        print(f"  Step {entry['step']}: Expanded {entry['node']} -> {produced}")


def export_dot(search: SearchState, path="folplan_search.dot"):
    """Export the search tree as a DOT file for Graphviz visualization."""
    nodes = list(search.frontier)
    if search.solution is not None:
        nodes.append(search.solution)

    # Every prefix of every known node's action path is a tree node.
    labels = {(): "[initial]"}
    for node in nodes:
        for i in range(1, node.depth + 1):
            labels[node.actions[:i]] = str(node.actions[i - 1])

    goal_path = set()
    if search.solution is not None:
        goal_path = {search.solution.actions[:i] for i in range(search.solution.depth + 1)}
    frontier_paths = {n.actions for n in search.frontier}

    ids = {path_: f"n{i}" for i, path_ in enumerate(labels)}
    with open(path, "w") as f:
        f.write("digraph search {\n")
        f.write("  rankdir=TB;\n")
        f.write("  node [shape=box, style=rounded];\n")
        for path_, label in labels.items():
            label = label.replace('"', '\\"')
            if path_ in goal_path:
                color = "palegreen"
            elif path_ in frontier_paths:
                color = "lightblue"
            else:
                color = "lightgray"
            f.write(f'  {ids[path_]} [label="{label}", fillcolor={color}, style=filled];\n')
            if path_:
                f.write(f"  {ids[path_[:-1]]} -> {ids[path_]};\n")
        f.write("}\n")
    print(f"Graph exported to {path}")


__all__ = ["print_problem", "print_search", "print_history", "print_plan", "export_dot"]
