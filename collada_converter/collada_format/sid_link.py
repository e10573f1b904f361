"""Scoped identifier (sid) lookup.

A sid path such as ``"Hips/Spine/rotateX"`` addresses an element relative
to some starting element.  Each segment is found by a breadth-first search
below the element matched by the previous segment.  The starting element
itself is never a match, only its descendants are.
"""

from collections import deque


def split_sid_path(path):
    """Split a sid path on "/" and drop empty segments."""
    return [sid for sid in path.split("/") if sid]


def find_sid_target(path, root):
    """Resolve a slash-delimited sid path against a root element.

    Args:
        path: Scoped path, e.g. "a/b".
        root: ColladaElement to start from.

    Returns:
        The matched ColladaElement, or None if any segment does not match.
    """
    sids = split_sid_path(path)
    if not sids or root is None:
        return None

    target = root
    for sid in sids:
        target = _find_sid(sid, target)
        if target is None:
            break
    return target


def _find_sid(sid, parent):
    """Breadth-first search below parent for the first element with the given sid."""
    queue = deque(parent.sid_children())
    while queue:
        element = queue.popleft()
        if element.sid == sid:
            return element
        queue.extend(element.sid_children())
    return None
