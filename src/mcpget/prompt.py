# Interactive client selection
import sys
from typing import TextIO

from mcpget.models import ClientType

# ABOUTME: Terminal codes for prompt output
BOLD = "\033[1m"
RESET = "\033[0m"


def select_from_list(
    items: list[ClientType],
    preselected: list[ClientType],
    labels: dict[ClientType, str] | None = None,
    stdin: TextIO | None = None,
) -> list[ClientType]:
    """Numbered multi-select read from stdin.

    ABOUTME: Enter with no input keeps the preselected clients
    ABOUTME: Out-of-range numbers are ignored; non-numeric input keeps the preselection

    Args:
        items: Clients to choose from, in display order
        preselected: Clients selected when the user just presses Enter
        labels: Display names per client (defaults to the identifier)
        stdin: Input stream (defaults to sys.stdin)

    Returns:
        Selected clients, in display order
    """
    if not items:
        return []

    stream = stdin or sys.stdin
    labels = labels or {}
    defaults = [item for item in items if item in preselected]

    print(f"{BOLD}Select MCP clients to configure:{RESET}")
    print()
    for idx, item in enumerate(items):
        status = " [default]" if item in defaults else ""
        print(f"  {idx + 1}. {labels.get(item, item.value)}{status}")

    print()
    print("Enter comma-separated numbers (e.g., 1,3) or press Enter for defaults:")
    user_input = stream.readline().strip()

    if not user_input:
        return defaults

    chosen: set[int] = set()
    try:
        for num_str in user_input.split(","):
            idx = int(num_str.strip()) - 1
            if 0 <= idx < len(items):
                chosen.add(idx)
    except ValueError:
        print("Invalid input. Using defaults.")
        return defaults

    return [item for idx, item in enumerate(items) if idx in chosen]
