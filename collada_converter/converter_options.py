"""Conversion options.

The COLLADA format leaves a few interpretation choices to the importer
(matrix storage order, whether skins are turned into skeletons at all).
They are grouped in small dataclasses so the converter can adapt without
constants scattered across modules.  A ConverterOptions instance travels
with the ConverterContext; code that needs an option reads it from there.
"""

from dataclasses import dataclass, field


# ---------------------------------------------------------------------------
# Configuration dataclasses
# ---------------------------------------------------------------------------

@dataclass
class MatrixConfig:
    """How flat matrix buffers in the document are laid out."""

    # COLLADA 1.4/1.5 store <matrix>, bind_shape_matrix and INV_BIND_MATRIX
    # row-major (translation in elements 3, 7, 11).  Set to False for
    # exporters that write column-major data.
    row_major: bool = True


@dataclass
class SkinConfig:
    """Skin / skeleton conversion switches."""

    # Build bone lists for every <instance_controller> skin.
    # When False, skins are skipped and only the node hierarchy is converted.
    create_skins: bool = True


@dataclass
class ConverterOptions:
    """All options for one conversion."""

    matrix: MatrixConfig = field(default_factory=MatrixConfig)
    skin: SkinConfig = field(default_factory=SkinConfig)

    # Name of the ``logging`` logger used by the default console sink.
    logger_name: str = "collada_converter"


DEFAULT_OPTIONS = ConverterOptions()
