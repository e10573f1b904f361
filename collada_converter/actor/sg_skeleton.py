"""Skeleton results handed to the rest of the converter."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional

from ..utils.matrix_math import mat4_to_json
from .sg_bone import Bone

if TYPE_CHECKING:
    from ..collada_format.collada_objects import Skin
    from ..scene_graph.sg_nodes import ConverterNode


@dataclass
class ConverterSkeleton:
    """Bone list built for one skin."""
    bones: List[Bone] = field(default_factory=list)

    def __len__(self):
        return len(self.bones)

    def is_empty(self):
        return not self.bones

    def find_bone_by_name(self, name: str) -> Optional[Bone]:
        """Skin joint name lookup; synthesized ancestors have no name."""
        return next((b for b in self.bones if name and b.name == name), None)

    def find_bone_by_node(self, node) -> Optional[Bone]:
        return next((b for b in self.bones if b.node is node), None)

    def get_children(self, bone_idx: int) -> List[int]:
        """Indices of the bones whose parent link points at ``bone_idx``.

        Roots are not children of anything, so ``-1`` yields an empty list.
        """
        if bone_idx < 0:
            return []
        return [b.index for b in self.bones if b.parent_index() == bone_idx]

    def roots(self) -> List[Bone]:
        return [b for b in self.bones if b.parent is None]

    def skin_bones(self) -> List[Bone]:
        """Bones listed by the skin itself, in joint order."""
        return [b for b in self.bones if b.attached_to_skin]

    def to_json(self):
        """Plain list of dicts, matrices column-major."""
        return [
            {
                "index": bone.index,
                "name": bone.name,
                "node": bone.node.name,
                "parent": bone.parent_index(),
                "attachedToSkin": bone.attached_to_skin,
                "animated": bone.animated,
                "invBindMatrix": mat4_to_json(bone.inv_bind_matrix),
            }
            for bone in self.bones
        ]


@dataclass
class ConverterSkin:
    """A converted <instance_controller> skin and its skeleton.

    ``skeleton`` is empty when the joints could not be resolved; the mesh
    is then used without skinning.
    """
    skin: "Skin"
    node: "ConverterNode"
    skeleton: ConverterSkeleton = field(default_factory=ConverterSkeleton)

    @property
    def has_skeleton(self):
        return not self.skeleton.is_empty()
