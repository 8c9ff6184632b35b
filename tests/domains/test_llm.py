"""
Tests for the LLM planner, with a stand-in client. No network.

The core claims:
    - The prompt carries the problem's actions, objects and goal
    - A valid proposal comes back as a Plan
    - A proposal that fails simulation, or cannot be parsed, is a
      PlanNotFound and never a partial plan
"""

from types import SimpleNamespace

import pytest

from folplan.core.plan import Plan
from folplan.domains.llm import make_llm_planner, parse_plan, describe_problem
from folplan.domains.romania import make_romania_roads_problem


class FakeClient:
    """Records requests and replies with canned text, in the anthropic shape."""

    def __init__(self, text):
        self.text = text
        self.requests = []
        self.messages = self

    def create(self, **kwargs):
        self.requests.append(kwargs)
        return SimpleNamespace(content=[SimpleNamespace(text=self.text)])


GOOD = '''```json
{"plan": [{"name": "Drive", "args": ["Sibiu", "Fagaras"]},
          {"name": "Drive", "args": ["Fagaras", "Bucharest"]}]}
```'''


# ── Parsing ─────────────────────────────────────────────────────────────────

class TestParsePlan:
    def test_fenced(self):
        assert parse_plan(GOOD)[0] == {"name": "Drive", "args": ["Sibiu", "Fagaras"]}

    def test_bare_with_preamble(self):
        steps = parse_plan('Here you go: {"plan": [{"name": "Fly", "args": []}]}')
        assert steps == [{"name": "Fly", "args": []}]

    def test_bare_with_trailing_prose(self):
        reply = ('{"plan": [{"name": "Drive", "args": ["Sibiu", "Fagaras"]}]}\n'
                 "This drives to Fagaras first. {Then} on to Bucharest.")
        assert parse_plan(reply) == [{"name": "Drive", "args": ["Sibiu", "Fagaras"]}]

    def test_trailing_prose_reply_is_planned(self):
        client = FakeClient(
            'Plan: {"plan": [{"name": "Drive", "args": ["Sibiu", "Fagaras"]}, '
            '{"name": "Drive", "args": ["Fagaras", "Bucharest"]}]} Safe travels.')
        result = make_llm_planner(client=client)(make_romania_roads_problem())
        assert result.names == ["Drive(Sibiu, Fagaras)", "Drive(Fagaras, Bucharest)"]

    def test_missing_plan(self):
        with pytest.raises(ValueError):
            parse_plan('{"steps": []}')

    def test_bad_args(self):
        with pytest.raises(ValueError):
            parse_plan('{"plan": [{"name": "Drive", "args": "Sibiu"}]}')

    def test_not_json(self):
        with pytest.raises(ValueError):
            parse_plan("I would drive to Fagaras first.")


# ── Planner ─────────────────────────────────────────────────────────────────

class TestPlanner:
    def test_valid_plan_returned(self):
        client = FakeClient(GOOD)
        result = make_llm_planner(client=client)(make_romania_roads_problem())
        assert isinstance(result, Plan)
        assert result.names == ["Drive(Sibiu, Fagaras)", "Drive(Fagaras, Bucharest)"]
        assert len(client.requests) == 1

    def test_prompt_describes_problem(self):
        client = FakeClient(GOOD)
        make_llm_planner(client=client, model="test-model")(make_romania_roads_problem())
        request = client.requests[0]
        assert request["model"] == "test-model"
        prompt = request["messages"][0]["content"]
        assert "Drive" in prompt
        assert "At(Bucharest)" in prompt
        assert "Fagaras" in prompt

    def test_invalid_plan_rejected(self):
        client = FakeClient('{"plan": [{"name": "Drive", "args": ["Sibiu", "Bucharest"]}]}')
        result = make_llm_planner(client=client)(make_romania_roads_problem())
        assert not result
        assert result.reason.startswith("proposed plan rejected: step 1:")

    def test_short_plan_rejected(self):
        client = FakeClient('{"plan": [{"name": "Drive", "args": ["Sibiu", "Fagaras"]}]}')
        result = make_llm_planner(client=client)(make_romania_roads_problem())
        assert not result
        assert "goal not satisfied" in result.reason

    def test_unreadable_reply(self):
        client = FakeClient("NO")
        result = make_llm_planner(client=client)(make_romania_roads_problem())
        assert not result
        assert result.reason.startswith("unreadable reply")


class TestDescribe:
    def test_objects_and_goal(self):
        d = describe_problem(make_romania_roads_problem())
        assert "Sibiu" in d["objects"]
        assert d["goal"] == ["At(Bucharest)"]
        assert d["actions"][0]["requires"] == ["At(x)", "Connected(x, y)"]
