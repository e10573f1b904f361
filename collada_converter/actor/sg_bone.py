"""Build the bone list of a COLLADA skin.

A <skin> names its joints by sid and stores one inverse bind matrix per
joint.  The joints it lists are often only part of the skeleton: bones that
carry no vertices but still move their children (e.g. a hip root) are left
out.  create_skin_bones() resolves every listed joint to a converted scene
node and then grows the list with the missing ancestors.

JOINT ADDRESSING:
    The COLLADA 1.4 reference is inconsistent here.  Joint names are not full sid
    addresses (chapter 3.3, "COLLADA Target Addressing") because they lack
    the leading anchor id.  The <skin> chapter implies they are scoped
    identifiers relative to the skeleton root node, so that is how they are
    resolved: a sid-style breadth-first search below each <skeleton> root.

SKINNING EQUATION (chapter 4, "Skin Deformation (or Skinning) in COLLADA"):
    v' = sum(weight_i * boneMatrix_i * invBindMatrix_i * bindShapeMatrix * v)

    The bind shape matrix is folded into each bone's inverse bind matrix
    here, so consumers only apply boneMatrix_i * bone.inv_bind_matrix.
"""

import logging
from typing import List, Optional

import numpy as np

from ..collada_format.collada_objects import VisualSceneNode
from ..collada_format.sid_link import find_sid_target
from ..log import LogLevel
from ..utils.matrix_math import as_mat4, mat4_extract

_log = logging.getLogger(__name__)


class Bone:
    """One skeletal joint in converter space.

    ``index`` is the bone's position in its list and never changes.
    ``parent`` always points into the same list.
    """

    __slots__ = ('index', 'node', 'name', 'parent', 'animated',
                 'attached_to_skin', 'inv_bind_matrix')

    def __init__(self, node, joint_sid, index):
        self.index = index
        self.node = node            # ConverterNode, shared with the scene
        self.name = joint_sid       # "" for bones added to close the hierarchy
        self.parent = None
        self.animated = False       # set by animation conversion
        self.attached_to_skin = False
        self.inv_bind_matrix = np.identity(4)

    def parent_index(self):
        return -1 if self.parent is None else self.parent.index

    def __repr__(self):
        return (
            f"Bone({self.index}, {self.name!r}, parent={self.parent_index()}, "
            f"attached={self.attached_to_skin})"
        )


def find_joint_target(joint_sid, skeleton_root_nodes):
    """Resolve a joint sid against the skeleton roots, first match wins.

    Returns:
        The matched element (not necessarily a node), or None.
    """
    for skeleton_root in skeleton_root_nodes:
        target = find_sid_target(joint_sid, skeleton_root)
        if target is not None:
            return target
    return None


def find_bone_node(joint_sid, skeleton_root_nodes) -> Optional[VisualSceneNode]:
    """Find the visual scene node referenced by a joint sid.

    Returns None if the sid does not resolve, or resolves to something
    other than a node (e.g. a <rotate> element).
    """
    target = find_joint_target(joint_sid, skeleton_root_nodes)
    if isinstance(target, VisualSceneNode):
        return target
    return None


def create_bone(node, joint_sid, bones):
    """Create a bone whose index is the next free slot of ``bones``.

    The caller appends it.
    """
    return Bone(node, joint_sid, len(bones))


def find_bone_parents(bones):
    """Link every bone to its parent bone, adding missing ancestors.

    The skeleton may contain more nodes than the skin references.  Any
    ancestor node with no bone yet gets a new one (empty name, not attached
    to the skin) appended to ``bones``; it is processed later in the same
    loop, so the chain continues upward until a top-level node is reached.

    Args:
        bones: Bone list, modified in place.
    """
    bone_by_node = {}
    for bone in bones:
        bone_by_node.setdefault(bone.node.handle, bone)

    # The list grows during traversal, therefore the while loop
    i = 0
    while i < len(bones):
        bone = bones[i]
        i += 1

        parent_node = bone.node.parent
        if parent_node is None:
            continue

        parent_bone = bone_by_node.get(parent_node.handle)
        if parent_bone is None:
            parent_bone = create_bone(parent_node, "", bones)
            bones.append(parent_bone)
            bone_by_node[parent_node.handle] = parent_bone
            _log.debug("Added bone %d for unreferenced node %r",
                       parent_bone.index, parent_node.name)
        bone.parent = parent_bone


def create_skin_bones(joint_sids, skeleton_root_nodes, bind_shape_matrix,
                      inv_bind_matrices, context) -> List[Bone]:
    """Create all bones used by a skin.

    All or nothing: if any joint cannot be resolved to a converted node the
    result is an empty list, since a partial skeleton would silently
    mis-skin the mesh.  Each failure is reported once through context.log.

    Args:
        joint_sids: Joint names of the skin, in skin order.
        skeleton_root_nodes: <skeleton> root nodes to search, in order.
        bind_shape_matrix: 4x4 bind shape matrix (internal layout).
        inv_bind_matrices: Flat buffer of 16 floats per joint.
        context: ConverterContext (log sink, node lookup, options).

    Returns:
        List of Bone; the skin's joints first (index = joint index), then
        the ancestors added by find_bone_parents().
    """
    bones = []

    if not skeleton_root_nodes:
        context.log.write("Skin has no skeleton root nodes, no bones created",
                          LogLevel.Warning)
        return []

    needed = 16 * len(joint_sids)
    if len(inv_bind_matrices) < needed:
        context.log.write(
            f"Skin has {len(inv_bind_matrices)} inverse bind matrix values, "
            f"{needed} needed for {len(joint_sids)} joints, no bones created",
            LogLevel.Warning)
        return []

    bind_shape_matrix = as_mat4(bind_shape_matrix)
    row_major = context.options.matrix.row_major

    # Add all bones referenced by the skin
    for joint_sid in joint_sids:
        target = find_joint_target(joint_sid, skeleton_root_nodes)
        if target is None:
            context.log.write(f"Joint {joint_sid} not found for skeleton, no bones created",
                              LogLevel.Warning)
            return []
        if not isinstance(target, VisualSceneNode):
            context.log.write(
                f"Joint {joint_sid} does not point to a visual scene node, no bones created",
                LogLevel.Warning)
            return []

        converter_node = context.find_node(target)
        if converter_node is None:
            context.log.write(f"Joint {joint_sid} not converted for skeleton, no bones created",
                              LogLevel.Warning)
            return []

        bone = create_bone(converter_node, joint_sid, bones)
        bone.attached_to_skin = True
        bone.inv_bind_matrix = (
            mat4_extract(inv_bind_matrices, bone.index, row_major) @ bind_shape_matrix
        )
        bones.append(bone)

    # Add all missing bones of the skeleton
    find_bone_parents(bones)

    _log.debug("Created %d bones for %d joints", len(bones), len(joint_sids))
    return bones
