"""
Domain: LLM planning.

Uses the Claude API to propose a whole plan for a problem. This is the
centaur mode: the LLM guesses, the simulator checks. A proposal that
fails to simulate is rejected, never returned.

Requires: pip install anthropic
          ANTHROPIC_API_KEY environment variable
"""

import json

from ..core.expr import constants_of
from ..core.bridge import sorted_facts
from ..core.plan import Plan, PlanNotFound
from ..planning.problem import simulate, resolve_step


def describe_problem(problem) -> dict:
    """The parts of a problem a language model needs, as JSON-friendly data."""
    objects = set()
    for f in problem.initial_state:
        objects |= constants_of(f)
    return {
        "actions": [
            {
                "name": a.name,
                "parameters": [str(p) for p in a.parameters],
                "requires": [str(p) for p in a.precond_pos + a.static],
                "forbids": [str(n) for n in a.precond_neg],
                "adds": [str(e) for e in a.effect_add],
                "deletes": [str(e) for e in a.effect_rem],
            }
            for a in problem.actions
        ],
        "objects": sorted(c.name for c in objects),
        "init": [str(f) for f in sorted_facts(problem.initial_state)],
        "rules": [str(r) for r in problem.rules],
        "goal": [str(g) for g in problem.goals] if problem.goals is not None else None,
    }


def parse_plan(text: str) -> list:
    """
    Pull the {"plan": [{"name": ..., "args": [...]}, ...]} object out of a
    reply, with or without a ```json fence. Raises ValueError when malformed.
    """
    start = text.find("```json")
    if start != -1:
        start += len("```json")
        end = text.find("```", start)
        text = text[start:end] if end != -1 else text[start:]
    else:
        brace = text.find("{")
        if brace != -1:
            text = text[brace:]

    # read the leading object only; prose may follow it
    data, _ = json.JSONDecoder().raw_decode(text.strip())
    items = data.get("plan") if isinstance(data, dict) else None
    if not isinstance(items, list):
        raise ValueError("reply has no 'plan' list")

    steps = []
    for i, it in enumerate(items):
        if not isinstance(it, dict) or not isinstance(it.get("name"), str):
            raise ValueError(f"plan item {i} has no action name")
        args = it.get("args", [])
        if not isinstance(args, list) or not all(isinstance(a, str) for a in args):
            raise ValueError(f"plan item {i}: 'args' must be a list of strings")
        steps.append({"name": it["name"], "args": args})
    return steps


def make_llm_planner(api_key=None, model="claude-sonnet-4-20250514", client=None):
    """
    Returns a planner problem -> Plan | PlanNotFound that consults Claude.

    client is anything with messages.create(...) in the anthropic shape;
    by default an anthropic.Anthropic is built on first use.
    """
    def llm_plan(problem):
        nonlocal client
        if client is None:
            try:
                import anthropic
            except ImportError:
                print("pip install anthropic")
                return PlanNotFound(reason="anthropic is not installed")
            client = anthropic.Anthropic(api_key=api_key)

        prompt = f"""You are planning strictly within a given symbolic domain.

Facts not listed in the state are false. An action can run when everything
it requires holds and nothing it forbids holds; it then deletes its delete
list and adds its add list. Rules derive further facts from the state.
Use only the listed action names and objects, with exactly as many
arguments as the action has parameters.

{json.dumps(describe_problem(problem), indent=2)}

Respond with JSON only, in this shape:
{{"plan": [{{"name": "ACTION_NAME", "args": ["obj1", "obj2"]}}]}}"""

        response = client.messages.create(
            model=model,
            max_tokens=1000,
            messages=[{"role": "user", "content": prompt}],
        )
        text = response.content[0].text.strip()

        try:
            steps = parse_plan(text)
        except ValueError as e:
            return PlanNotFound(reason=f"unreadable reply: {e}")

        ok, report = simulate(problem, steps)
        if not ok:
            return PlanNotFound(reason=f"proposed plan rejected: {report}")

        actions = tuple(resolve_step(problem, s) for s in steps)
        states = [problem.initial_state]
        for action in actions:
            states.append(action.apply(states[-1]))
        return Plan(actions=actions, states=tuple(states), nodes_expanded=0)

    return llm_plan
