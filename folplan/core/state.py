"""
Search data structures: Node and SearchState.

Nothing in here depends on actions' semantics, problems, or strategies.

A Node is a world state (a frozenset of ground facts) plus the actions
that led to it from the initial state. A SearchState is the full state
of the search loop, serializable for continuity: a long search can be
checkpointed to JSON after every step and resumed later.

    frontier:  nodes generated but not yet expanded
    seen:      every state generated so far -> the smallest depth it was reached at
    history:   log of what happened at each step
"""

from dataclasses import dataclass, field
from typing import Optional
from collections import deque
import json

from .expr import expr_to_data, expr_from_data
from .bridge import sorted_facts


@dataclass(eq=False)
class Node:
    """A search node. Compared by identity: two nodes may share a state."""
    state: frozenset
    actions: tuple = ()
    step: int = 0

    @property
    def depth(self) -> int:
        return len(self.actions)

    @property
    def name(self):
        if not self.actions:
            return "[initial]"
        return " -> ".join(str(a) for a in self.actions)

    def __repr__(self):
        return f"Node({self.name})"


def _state_to_data(state):
    return [expr_to_data(f) for f in sorted_facts(state)]


def _state_from_data(data) -> frozenset:
    return frozenset(expr_from_data(f) for f in data)


@dataclass
class SearchState:
    initial_state: frozenset = frozenset()
    frontier: deque = field(default_factory=deque)
    seen: dict = field(default_factory=dict)
    history: list = field(default_factory=list)
    step: int = 0
    halted: bool = False
    halt_reason: str = ""
    solution: Optional[Node] = None

    @classmethod
    def start(cls, initial_state) -> "SearchState":
        initial_state = frozenset(initial_state)
        search = cls(initial_state=initial_state)
        search.frontier.append(Node(initial_state))
        search.seen[initial_state] = 0
        return search

    def to_dict(self):
        def serialize(node):
            return {"state": _state_to_data(node.state),
                    "actions": [a.to_dict() for a in node.actions],
                    "step": node.step}

        return {
            "initial_state": _state_to_data(self.initial_state),
            "frontier": [serialize(n) for n in self.frontier],
            "seen": [{"state": _state_to_data(s), "depth": d} for s, d in self.seen.items()],
            "history": self.history,
            "step": self.step,
            "halted": self.halted,
            "halt_reason": self.halt_reason,
            "solution": serialize(self.solution) if self.solution is not None else None,
        }

    @classmethod
    def from_dict(cls, d):
        from ..planning.action import Action

        def deserialize(data):
            return Node(
                state=_state_from_data(data["state"]),
                actions=tuple(Action.from_dict(a) for a in data["actions"]),
                step=data.get("step", 0),
            )

        search = cls(initial_state=_state_from_data(d["initial_state"]))
        search.frontier = deque(deserialize(n) for n in d["frontier"])
        search.seen = {_state_from_data(e["state"]): e["depth"] for e in d["seen"]}
        search.history = d["history"]
        search.step = d["step"]
        search.halted = d.get("halted", False)
        search.halt_reason = d.get("halt_reason", "")
        if d.get("solution") is not None:
            search.solution = deserialize(d["solution"])
        return search

    def save(self, path="folplan_search.json"):
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path="folplan_search.json"):
        with open(path) as f:
            return cls.from_dict(json.load(f))
