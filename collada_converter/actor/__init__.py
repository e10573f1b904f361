"""Skeleton construction for skinned meshes."""

from .sg_bone import (
    Bone,
    create_bone,
    create_skin_bones,
    find_bone_node,
    find_bone_parents,
    find_joint_target,
)
from .sg_skeleton import ConverterSkeleton, ConverterSkin

__all__ = [
    "Bone",
    "ConverterSkeleton",
    "ConverterSkin",
    "create_bone",
    "create_skin_bones",
    "find_bone_node",
    "find_bone_parents",
    "find_joint_target",
]
