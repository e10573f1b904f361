"""Per-conversion state passed explicitly to every conversion step."""

from typing import TYPE_CHECKING, Optional

from ..converter_options import DEFAULT_OPTIONS
from ..log import ColladaLogConsole

if TYPE_CHECKING:
    from .sg_nodes import ConverterNode


class ConverterContext:
    """Log sink, options and the scene node -> converter node lookup.

    One context belongs to exactly one conversion.  Nodes are registered by
    their stable ``handle``; nothing here is shared between conversions.
    """

    def __init__(self, log=None, options=None):
        self.options = options if options is not None else DEFAULT_OPTIONS
        self.log = log if log is not None else ColladaLogConsole(self.options.logger_name)
        self._nodes = {}  # VisualSceneNode.handle -> ConverterNode

    def register_node(self, scene_node, converter_node):
        self._nodes[scene_node.handle] = converter_node

    def find_node(self, scene_node) -> Optional["ConverterNode"]:
        """Return the converter node created for a scene node, or None."""
        return self._nodes.get(scene_node.handle)

    @property
    def node_count(self):
        return len(self._nodes)
