"""Converter-space mirror of the visual scene node hierarchy.

Each VisualSceneNode that is converted gets exactly one ConverterNode with
the same parent/child structure.  Bones reference ConverterNodes, never the
document nodes directly.
"""

import numpy as np

from ..utils.matrix_math import decompose


class ConverterNode:
    """A scene node in converter space."""

    __slots__ = ('node', 'parent', 'children', 'name', 'local_matrix')

    def __init__(self, node, parent=None):
        self.node = node
        self.parent = parent
        self.children = []
        self.name = node.name or node.id or ""
        self.local_matrix = np.identity(4)

    @property
    def handle(self):
        return self.node.handle

    def world_matrix(self):
        """Accumulated node transform (parent world @ local)."""
        if self.parent is None:
            return self.local_matrix.copy()
        return self.parent.world_matrix() @ self.local_matrix

    def get_local_trs(self):
        """Local transform as (translation, rotation wxyz, scale)."""
        return decompose(self.local_matrix)

    def __repr__(self):
        return f"ConverterNode({self.handle}, {self.name!r}, children={len(self.children)})"


def create_node(scene_node, context, parent=None):
    """Recursively convert a VisualSceneNode and its subtree.

    Every created node is registered in the context so later steps (skin
    bones) can find it.

    Args:
        scene_node: VisualSceneNode to convert.
        context: ConverterContext for this conversion.
        parent: Converter-space parent, None for top-level nodes.

    Returns:
        The new ConverterNode.
    """
    converter_node = ConverterNode(scene_node, parent)
    converter_node.local_matrix = node_local_matrix(
        scene_node, context.options.matrix.row_major
    )
    context.register_node(scene_node, converter_node)

    for child in scene_node.children:
        converter_node.children.append(create_node(child, context, converter_node))

    return converter_node


def node_local_matrix(scene_node, row_major=True):
    """Product of a node's transform elements, in document order."""
    m = np.identity(4)
    for transform in scene_node.transformations:
        m = m @ transform.to_matrix(row_major)
    return m


def iter_nodes(nodes):
    """Depth-first, pre-order walk over converter node trees."""
    stack = list(reversed(nodes))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))
