"""
Test the conversion driver end to end on in-memory documents.
"""

import logging

import numpy as np

from collada_converter.collada_format.collada_objects import (
    ColladaDocument,
    NodeTransform,
    VisualScene,
    VisualSceneNode,
)
from collada_converter.converter import ColladaConverter, create_scene
from collada_converter.converter_options import ConverterOptions, SkinConfig
from collada_converter.log import LogLevel
from collada_converter.scene_graph.sg_nodes import iter_nodes

from conftest import translation_values


def test_document_without_scene(log):
    result = ColladaConverter(log).convert(ColladaDocument())
    assert result.nodes == []
    assert result.skins == []
    assert log.messages(LogLevel.Warning) == ["Collada document has no scene"]


def test_dangling_scene_instance(log, context):
    doc = ColladaDocument()
    doc.scene_instance = "#DoesNotExist"
    assert create_scene(doc, context) == []
    assert log.count(LogLevel.Warning) == 1


def test_default_sink_uses_logging(caplog):
    with caplog.at_level(logging.WARNING, logger="collada_converter"):
        ColladaConverter().convert(ColladaDocument())
    assert "Collada document has no scene" in caplog.text


def test_nodes_mirror_scene(rig, log):
    result = ColladaConverter(log).convert(rig.doc)
    assert [n.name for n in result.nodes] == ["Armature", "Mesh"]
    names = [n.name for n in iter_nodes(result.nodes)]
    assert names == ["Armature", "Hips", "Spine", "Head", "LegL", "Mesh"]
    for node in iter_nodes(result.nodes):
        for child in node.children:
            assert child.parent is node
            assert child.node.parent is node.node


def test_skin_is_converted(rig, log):
    rig.add_skin(["Hips", "Spine"], [rig.armature],
                 bind_shape_matrix=translation_values(0.0, 0.0, 2.0))
    result = ColladaConverter(log).convert(rig.doc)

    assert len(result.skins) == 1
    skin = result.skins[0]
    assert skin.has_skeleton
    assert skin.node.name == "Mesh"
    assert [b.node.name for b in skin.skeleton.bones] == ["Hips", "Spine", "Armature"]
    np.testing.assert_allclose(skin.skeleton.bones[0].inv_bind_matrix[:3, 3], [0.0, 0.0, 2.0])
    assert log.count(LogLevel.Warning) == 0


def test_unresolved_skin_keeps_converting(rig, log):
    rig.add_skin(["Hips", "Tail"], [rig.armature])
    rig.add_skin(["Head"], [rig.armature])
    result = ColladaConverter(log).convert(rig.doc)

    assert len(result.nodes) == 2
    assert len(result.skins) == 2
    broken, working = result.skins
    assert not broken.has_skeleton
    assert working.has_skeleton
    assert log.count(LogLevel.Warning) == 1


def test_short_bind_shape_matrix_keeps_converting(rig, log):
    rig.add_skin(["Hips"], [rig.armature], bind_shape_matrix=[1.0, 0.0, 0.0])
    rig.add_skin(["Spine"], [rig.armature])
    result = ColladaConverter(log).convert(rig.doc)

    assert len(result.nodes) == 2
    broken, working = result.skins
    assert not broken.has_skeleton
    assert broken.node.name == "Mesh"
    assert working.has_skeleton
    assert log.count(LogLevel.Warning) == 1
    assert "bind shape matrix" in log.messages(LogLevel.Warning)[0]


def test_skeleton_root_outside_scene(rig, log):
    """Joints under a node that is not part of the converted scene."""
    orphan = VisualSceneNode(sid="Orphan", name="Orphan")
    orphan.add_child(VisualSceneNode(sid="Bone", name="Bone"))
    rig.add_skin(["Bone"], [orphan])

    result = ColladaConverter(log).convert(rig.doc)
    assert not result.skins[0].has_skeleton
    assert "not converted" in log.messages(LogLevel.Warning)[0]


def test_skins_can_be_disabled(rig, log):
    rig.add_skin(["Hips"], [rig.armature])
    options = ConverterOptions(skin=SkinConfig(create_skins=False))
    result = ColladaConverter(log, options).convert(rig.doc)
    assert result.skins == []
    assert len(result.nodes) == 2


def test_node_transforms_are_accumulated(log):
    scene = VisualScene(id="Scene")
    parent = scene.add_child(VisualSceneNode(name="Parent"))
    parent.add_transform(NodeTransform("translate", (1.0, 0.0, 0.0)))
    child = parent.add_child(VisualSceneNode(name="Child"))
    child.add_transform(NodeTransform("rotate", (0.0, 0.0, 1.0, 90.0)))
    child.add_transform(NodeTransform("scale", (2.0, 2.0, 2.0)))
    doc = ColladaDocument()
    doc.add_visual_scene(scene)

    result = ColladaConverter(log).convert(doc)
    child_node = result.nodes[0].children[0]

    world = child_node.world_matrix()
    np.testing.assert_allclose(world @ [1.0, 0.0, 0.0, 1.0], [1.0, 2.0, 0.0, 1.0], atol=1e-9)

    translation, rotation, scale = child_node.get_local_trs()
    np.testing.assert_allclose(translation, [0.0, 0.0, 0.0], atol=1e-9)
    np.testing.assert_allclose(scale, [2.0, 2.0, 2.0], atol=1e-9)
    np.testing.assert_allclose(rotation, [np.sqrt(0.5), 0.0, 0.0, np.sqrt(0.5)], atol=1e-9)


def test_matrix_element_uses_row_major_option(log):
    scene = VisualScene(id="Scene")
    node = scene.add_child(VisualSceneNode(name="Node"))
    node.add_transform(NodeTransform("matrix", translation_values(3.0, 4.0, 5.0)))
    doc = ColladaDocument()
    doc.add_visual_scene(scene)

    result = ColladaConverter(log).convert(doc)
    np.testing.assert_allclose(result.nodes[0].local_matrix[:3, 3], [3.0, 4.0, 5.0])
