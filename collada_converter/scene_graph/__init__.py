from .sg_context import ConverterContext
from .sg_nodes import ConverterNode, create_node, iter_nodes, node_local_matrix

__all__ = [
    "ConverterContext",
    "ConverterNode",
    "create_node",
    "iter_nodes",
    "node_local_matrix",
]
