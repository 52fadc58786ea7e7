
def format_node(keys) -> str:
    return "[ " + "".join(f"{k} " for k in keys) + "]"


def format_levels(levels) -> str:
    """Render a level-order walk, one line per level."""
    return "\n".join(" ".join(format_node(keys) for keys in level) for level in levels)
