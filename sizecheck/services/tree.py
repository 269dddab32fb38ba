from __future__ import annotations

from sizecheck.models.scan import ScanNode

# Shared empty list for file nodes.
# IMPORTANT: never append to this; only directory nodes get their own mutable [].
LEAF_CHILDREN: list[ScanNode] = []


def finalize_sizes(root: ScanNode) -> None:
    """Bottom-up pass: add children sizes into directory nodes and sort by size.

    A directory's own ``size_bytes`` holds whatever a collapsed walk folded into
    it; the pass adds the totals of its materialized children on top, so it must
    run exactly once per tree.
    """
    stack: list[ScanNode] = []
    visit: list[ScanNode] = [root]
    while visit:
        node = visit.pop()
        if not node.is_dir:
            continue
        stack.append(node)
        visit.extend(node.children)
    for node in reversed(stack):
        node.size_bytes += sum(child.size_bytes for child in node.children)
        node.children.sort(key=lambda x: (-x.size_bytes, x.name))

