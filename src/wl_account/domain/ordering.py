"""Account list ordering: "user2" sorts before "user10"."""

import re

_FIRST_NUMBER = re.compile(r"\d+")


def display_sort_key(display_name: str) -> tuple[int, int, str]:
    """Sort by the first integer in the name, names without one last, then by name."""
    match = _FIRST_NUMBER.search(display_name)
    if match is None:
        return (1, 0, display_name)
    return (0, int(match.group()), display_name)
