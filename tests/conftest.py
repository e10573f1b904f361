"""Shared fixtures: small visual scenes and a converter context per test.

Scene used by most tests (sids in brackets):

    VisualScene
      Armature [Armature]
        Hips [Hips]          <rotate sid="rotateX">
          Spine [Spine]
            Head [Head]
          LegL [LegL]
      Mesh                   (holds the <instance_controller>)
"""

import pytest

from collada_converter.collada_format.collada_objects import (
    ColladaDocument,
    InstanceController,
    NodeTransform,
    Skin,
    VisualScene,
    VisualSceneNode,
)
from collada_converter.converter_options import ConverterOptions
from collada_converter.log import ColladaLogMemory
from collada_converter.scene_graph.sg_context import ConverterContext
from collada_converter.scene_graph.sg_nodes import create_node


IDENTITY = [
    1.0, 0.0, 0.0, 0.0,
    0.0, 1.0, 0.0, 0.0,
    0.0, 0.0, 1.0, 0.0,
    0.0, 0.0, 0.0, 1.0,
]


def translation_values(x, y, z):
    """Row-major 16 floats of a pure translation."""
    return [
        1.0, 0.0, 0.0, x,
        0.0, 1.0, 0.0, y,
        0.0, 0.0, 1.0, z,
        0.0, 0.0, 0.0, 1.0,
    ]


def make_node(sid, parent=None, name=None):
    node = VisualSceneNode(id=f"{sid}_id", sid=sid, name=name or sid)
    if parent is not None:
        parent.add_child(node)
    return node


class Rig:
    """Named access to the nodes of the shared test scene."""

    def __init__(self):
        self.scene = VisualScene(id="Scene")
        self.armature = self.scene.add_child(make_node("Armature"))
        self.hips = make_node("Hips", self.armature)
        self.hips_rotate = self.hips.add_transform(
            NodeTransform("rotate", (1.0, 0.0, 0.0, 0.0), sid="rotateX"))
        self.spine = make_node("Spine", self.hips)
        self.head = make_node("Head", self.spine)
        self.leg = make_node("LegL", self.hips)
        self.mesh = self.scene.add_child(VisualSceneNode(id="Mesh", name="Mesh"))

        self.doc = ColladaDocument()
        self.doc.add_visual_scene(self.scene)

    def add_skin(self, joints, skeletons, inv_bind_matrices=None, bind_shape_matrix=None):
        if inv_bind_matrices is None:
            inv_bind_matrices = IDENTITY * len(joints)
        skin = Skin(joints=list(joints), inv_bind_matrices=inv_bind_matrices)
        if bind_shape_matrix is not None:
            skin.bind_shape_matrix = bind_shape_matrix
        instance = InstanceController(skin=skin, skeletons=list(skeletons))
        self.mesh.instance_controllers.append(instance)
        return instance


@pytest.fixture
def rig():
    return Rig()


@pytest.fixture
def log():
    return ColladaLogMemory()


@pytest.fixture
def context(log):
    return ConverterContext(log, ConverterOptions())


@pytest.fixture
def converted_rig(rig, context):
    """The rig with every top-level node converted into ``context``."""
    for top in rig.scene.children:
        create_node(top, context)
    return rig
