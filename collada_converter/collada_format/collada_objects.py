"""In-memory COLLADA document elements consumed by the converter.

Only the parts the scene/skeleton conversion reads are modelled:
    <visual_scene>/<node> hierarchy with sid-addressable transform elements,
    <skin> controllers and the <instance_controller> that binds them to
    skeleton root nodes, and the <scene> instance link.

Nodes carry a stable integer ``handle``.  Converter-side lookups are keyed
by that handle rather than by object identity.
"""

import itertools
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..utils.matrix_math import TRANSFORM_KINDS, transform_to_mat4


_IDENTITY_VALUES = (
    1.0, 0.0, 0.0, 0.0,
    0.0, 1.0, 0.0, 0.0,
    0.0, 0.0, 1.0, 0.0,
    0.0, 0.0, 0.0, 1.0,
)

_node_handles = itertools.count()


class ColladaElement:
    """Base class for every addressable element.

    ``id`` is unique in the document, ``sid`` only among the element's
    siblings.  Subclasses that own addressable children override
    sid_children().
    """

    __slots__ = ('id', 'sid', 'name')

    def __init__(self, id=None, sid=None, name=None):
        self.id = id
        self.sid = sid
        self.name = name

    def sid_children(self):
        """Child elements searched by scoped identifier lookup, in order."""
        return []

    def __repr__(self):
        return f"{type(self).__name__}(id={self.id!r}, sid={self.sid!r})"


class NodeTransform(ColladaElement):
    """One <matrix>, <translate>, <rotate> or <scale> element of a node."""

    __slots__ = ('kind', 'values')

    def __init__(self, kind, values, sid=None):
        if kind not in TRANSFORM_KINDS:
            raise ValueError(f"Unknown transform element: {kind!r}")
        super().__init__(sid=sid)
        self.kind = kind
        self.values = tuple(float(v) for v in values)

    def to_matrix(self, row_major=True):
        return transform_to_mat4(self.kind, self.values, row_major)

    def __repr__(self):
        return f"NodeTransform({self.kind!r}, sid={self.sid!r})"


class VisualSceneNode(ColladaElement):
    """A <node> in a visual scene.

    Children are linked both ways: add_child() sets the child's ``parent``.
    Top-level nodes of a visual scene have ``parent = None``.
    """

    __slots__ = ('handle', 'parent', 'children', 'transformations',
                 'instance_controllers')

    def __init__(self, id=None, sid=None, name=None):
        super().__init__(id=id, sid=sid, name=name)
        self.handle = next(_node_handles)
        self.parent = None
        self.children = []
        self.transformations = []
        self.instance_controllers = []

    def add_child(self, node):
        node.parent = self
        self.children.append(node)
        return node

    def add_transform(self, transform):
        self.transformations.append(transform)
        return transform

    def sid_children(self):
        # Transform elements come before child nodes in a <node>
        return list(self.transformations) + list(self.children)

    def __repr__(self):
        return (
            f"VisualSceneNode({self.handle}, id={self.id!r}, sid={self.sid!r}, "
            f"children={len(self.children)})"
        )


class VisualScene(ColladaElement):
    """A <visual_scene>: the ordered list of top-level nodes."""

    __slots__ = ('children',)

    def __init__(self, id=None, name=None):
        super().__init__(id=id, name=name)
        self.children = []

    def add_child(self, node):
        self.children.append(node)
        return node

    def sid_children(self):
        return list(self.children)


@dataclass
class Skin:
    """A <skin> controller.

    ``inv_bind_matrices`` holds one 16-float block per joint, in joint
    order, in the document's matrix storage order.
    """
    joints: List[str]
    inv_bind_matrices: Sequence[float]
    bind_shape_matrix: Sequence[float] = _IDENTITY_VALUES
    source: Optional[str] = None  # url of the skinned <geometry>


@dataclass
class InstanceController:
    """An <instance_controller> placing a skin under a node."""
    skin: Skin
    skeletons: List[VisualSceneNode] = field(default_factory=list)
    url: Optional[str] = None


class ColladaDocument:
    """A loaded COLLADA document."""

    def __init__(self):
        self.visual_scenes = {}     # id -> VisualScene
        self.scene_instance = None  # url of <instance_visual_scene>, e.g. "#Scene"

    def add_visual_scene(self, scene, instantiate=True):
        """Register a visual scene; by default also make it the active scene."""
        self.visual_scenes[scene.id] = scene
        if instantiate:
            self.scene_instance = f"#{scene.id}"
        return scene

    def get_scene(self) -> Optional[VisualScene]:
        """Resolve the <scene> instance link, or None if there is no scene."""
        if not self.scene_instance:
            return None
        url = self.scene_instance
        if url.startswith("#"):
            url = url[1:]
        return self.visual_scenes.get(url)
