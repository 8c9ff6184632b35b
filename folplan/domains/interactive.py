"""
Domain: Interactive (human in the loop).

The human chooses which node to expand next. Any problem can be searched
this way with --strategy interactive.
"""


def interactive_choose_node(frontier):
    """Let the human choose which node to expand next."""
    print("\nWhich node would you like to expand?")
    nodes = list(frontier)
    for i, node in enumerate(nodes):
        print(f"  [{i}] (depth {node.depth}) {node.name}")
    while True:
        try:
            choice = input("> ").strip()
            if choice.lower() in ('q', 'quit', 'exit'):
                raise KeyboardInterrupt
            idx = int(choice)
            return nodes[idx]
        except (ValueError, IndexError):
            print("Enter a number, or 'q' to quit.")
