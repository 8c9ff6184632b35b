"""
CLI entry point. Run as: python -m folplan --problem <name>
"""

import argparse
import os

from .core.expr import expr
from .core.state import SearchState
from .core.plan import print_plan
from .planning.search import plan, STRATEGIES
from .planning.problem import simulate
from .visualization import print_problem, print_search, print_history, export_dot
from .domains import PROBLEMS
from .domains.llm import make_llm_planner


def run_ask(problem, words, quiet=False):
    """Query the problem's knowledge base: --ask Connected Sibiu y"""
    query = expr(words[0], *words[1:])
    answers = problem.kb.ask_all(query)
    if not answers:
        print(f"{query}: no")
        return answers
    print(f"{query}: yes ({len(answers)} answer{'s' if len(answers) != 1 else ''})")
    if not quiet:
        for answer in answers:
            if answer:
                print("  " + ", ".join(f"{k} = {v}" for k, v in sorted(answer.items())))
    return answers


def main(argv=None):
    parser = argparse.ArgumentParser(description="Forward-chaining KB and STRIPS planner")
    parser.add_argument("--problem", choices=list(PROBLEMS.keys()), default="romania",
                        help="Which planning problem to solve")
    parser.add_argument("--bound",       type=int,   default=None,
                        help="Max plan length (default: per problem)")
    parser.add_argument("--max-nodes",   type=int,   default=10_000, help="Max nodes expanded")
    parser.add_argument("--max-seconds", type=float, default=None,   help="Wall-clock limit")
    parser.add_argument("--strategy", choices=list(STRATEGIES.keys()), default=None,
                        help="Node selection (default: per problem, else breadth_first)")
    parser.add_argument("--ask",   nargs="+", default=None, metavar="WORD",
                        help="Ask the problem KB instead of planning: Pred arg ...")
    parser.add_argument("--save",  type=str, default=None, help="Checkpoint the search to file")
    parser.add_argument("--load",  type=str, default=None, help="Resume a search from file")
    parser.add_argument("--dot",   type=str, default=None, help="Export DOT search tree to file")
    parser.add_argument("--quiet", action="store_true",    help="Less output")
    args = parser.parse_args(argv)

    entry = PROBLEMS[args.problem]
    problem = entry["make_problem"]()
    bound = args.bound if args.bound is not None else entry["bound"]
    strategy = args.strategy or entry.get("strategy", "breadth_first")

    if args.ask:
        run_ask(problem, args.ask, quiet=args.quiet)
        return 0

    print(f"Problem: {args.problem}")
    if not args.quiet:
        print_problem(problem)

    # LLM planning is a single proposal, checked by simulation.
    if entry.get("planner") == "llm":
        planner = make_llm_planner(os.environ.get("ANTHROPIC_API_KEY"))
        result = planner(problem)
        print_plan(result, show_states=not args.quiet)
        return 0 if result else 1

    # --- Load or start the search ---
    search = None
    if args.load:
        search = SearchState.load(args.load)
        print(f"Loaded search from {args.load} (step {search.step})")
    else:
        search = SearchState.start(problem.initial_state)

    # --- Run ---
    try:
        result = plan(
            problem, bound,
            max_nodes=args.max_nodes,
            max_seconds=args.max_seconds,
            strategy=strategy,
            verbose=not args.quiet,
            search=search,
            save_path=args.save,
        )
    except KeyboardInterrupt:
        print("\nInterrupted.")
        result = None

    if not args.quiet:
        print_search(search)
        print_history(search)

    if result is not None:
        print_plan(result, show_states=not args.quiet)
        if result:
            ok, report = simulate(problem, result.actions)
            print(f"Check: {report}")

    if args.dot:
        export_dot(search, args.dot)

    if args.save:
        search.save(args.save)
        print(f"Search saved to {args.save}")

    return 0 if result else 1


if __name__ == "__main__":
    raise SystemExit(main())
