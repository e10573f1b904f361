"""
collada_converter: skeleton reconstruction for COLLADA skins.

Resolves a skin's joint sids against its skeleton roots, grows the bone list
to the full hierarchy, and bakes the bind shape matrix into every bone's
inverse bind matrix.
"""

__version__ = "0.2.0"

from .actor import Bone, ConverterSkeleton, ConverterSkin, create_skin_bones, find_bone_parents
from .converter import ColladaConverter, ConverterFile
from .converter_options import DEFAULT_OPTIONS, ConverterOptions
from .log import ColladaLogConsole, ColladaLogMemory, LogLevel
from .scene_graph import ConverterContext, ConverterNode

__all__ = [
    "Bone",
    "ColladaConverter",
    "ColladaLogConsole",
    "ColladaLogMemory",
    "ConverterContext",
    "ConverterFile",
    "ConverterNode",
    "ConverterOptions",
    "ConverterSkeleton",
    "ConverterSkin",
    "DEFAULT_OPTIONS",
    "LogLevel",
    "create_skin_bones",
    "find_bone_parents",
]
