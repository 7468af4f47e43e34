"""Depth bound for traversals without a cycle guard."""

DEFAULT_MAX_DEPTH = 100
"""Depth at which a traversal without an explicit bound is aborted."""


class DepthLimitExceededError(RuntimeError):
    """Raised when a traversal reaches the default depth bound."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(f"max depth exceeded: {limit}")


def check_max_depth(depth: int, max_depth: int | None, default_max_depth: int = DEFAULT_MAX_DEPTH) -> bool:
    """Decide whether a traversal may expand past `depth`.

    Args:
        depth: Depth reached so far, counted as the number of nodes on the
            current path.
        max_depth: Explicit bound chosen by the caller, or None.
        default_max_depth: Bound used when `max_depth` is None.

    Returns:
        True to keep expanding, False to stop at the explicit bound.

    Raises:
        DepthLimitExceededError: If no explicit bound was given and `depth`
            reached `default_max_depth`.

    """
    if max_depth is not None:
        return depth < max_depth
    if depth >= default_max_depth:
        raise DepthLimitExceededError(default_max_depth)
    return True
