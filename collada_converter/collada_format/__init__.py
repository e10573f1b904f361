from .collada_objects import (
    ColladaDocument,
    ColladaElement,
    InstanceController,
    NodeTransform,
    Skin,
    VisualScene,
    VisualSceneNode,
)
from .sid_link import find_sid_target, split_sid_path

__all__ = [
    "ColladaDocument",
    "ColladaElement",
    "InstanceController",
    "NodeTransform",
    "Skin",
    "VisualScene",
    "VisualSceneNode",
    "find_sid_target",
    "split_sid_path",
]
