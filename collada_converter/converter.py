"""Top-level COLLADA conversion driver.

Converts the instantiated visual scene into ConverterNodes, then builds a
skeleton for every skin placed in the scene by an <instance_controller>.

A skin whose joints cannot be resolved still produces a ConverterSkin, just
with an empty skeleton: the mesh is kept, unskinned, and the reason is in
the log.
"""

import logging
from dataclasses import dataclass, field
from typing import List

from .actor.sg_bone import create_skin_bones
from .actor.sg_skeleton import ConverterSkeleton, ConverterSkin
from .converter_options import DEFAULT_OPTIONS
from .log import ColladaLogConsole, LogLevel
from .scene_graph.sg_context import ConverterContext
from .scene_graph.sg_nodes import ConverterNode, create_node, iter_nodes
from .utils.matrix_math import mat4_from_values

_log = logging.getLogger(__name__)


@dataclass
class ConverterFile:
    """Result of converting one document."""
    nodes: List[ConverterNode] = field(default_factory=list)
    skins: List[ConverterSkin] = field(default_factory=list)


class ColladaConverter:
    """Converts ColladaDocuments.

    Usage:
        converter = ColladaConverter()
        result = converter.convert(doc)
        for skin in result.skins:
            bones = skin.skeleton.bones
    """

    def __init__(self, log=None, options=None):
        self.options = options if options is not None else DEFAULT_OPTIONS
        self.log = log if log is not None else ColladaLogConsole(self.options.logger_name)

    def convert(self, doc) -> ConverterFile:
        context = ConverterContext(self.log, self.options)

        result = ConverterFile()

        # Scene nodes
        result.nodes = create_scene(doc, context)

        # Skins
        if self.options.skin.create_skins:
            result.skins = create_skins(result.nodes, context)

        _log.debug("Converted %d nodes, %d skins", context.node_count, len(result.skins))
        return result


def create_scene(doc, context) -> List[ConverterNode]:
    """Convert every top-level node of the document's visual scene."""
    result = []

    scene = doc.get_scene()
    if scene is None:
        context.log.write("Collada document has no scene", LogLevel.Warning)
        return result

    for top_level_node in scene.children:
        result.append(create_node(top_level_node, context))

    return result


def create_skins(nodes, context) -> List[ConverterSkin]:
    """Build a ConverterSkin for each <instance_controller> under ``nodes``."""
    row_major = context.options.matrix.row_major
    skins = []

    for converter_node in iter_nodes(nodes):
        for instance in converter_node.node.instance_controllers:
            skin = instance.skin
            try:
                bind_shape_matrix = mat4_from_values(skin.bind_shape_matrix, row_major)
            except ValueError as e:
                context.log.write(
                    f"Skin on node {converter_node.name} has an invalid bind shape matrix "
                    f"({e}), no bones created", LogLevel.Warning)
                skins.append(ConverterSkin(skin, converter_node))
                continue

            bones = create_skin_bones(skin.joints, instance.skeletons,
                                      bind_shape_matrix, skin.inv_bind_matrices,
                                      context)
            if not bones and skin.joints:
                context.log.write(
                    f"Skin on node {converter_node.name} has no skeleton, "
                    f"mesh will not be skinned", LogLevel.Info)
            skins.append(ConverterSkin(skin, converter_node, ConverterSkeleton(bones)))

    return skins
