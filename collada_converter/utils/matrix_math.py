"""Vector and matrix helpers for COLLADA float arrays.

COLLADA stores <matrix> elements, bind shape matrices and INV_BIND_MATRIX
sources as 16 floats in row-major order using the column-vector convention
(translation in elements 3, 7 and 11).

Internally every matrix is a 4x4 numpy array indexed [row, col] with the
translation in the last column.  Reading a row-major block into that layout
is the transpose of the raw column-major copy a GL-style math library would
make, so extraction is a C-order reshape.  JSON output goes back to a flat
column-major list (translation in elements 12, 13 and 14).

Quaternions are (w, x, y, z), the same order the rest of the converter uses.
scipy works in (x, y, z, w); the reordering happens here and nowhere else.
"""

import math

import numpy as np
from scipy.spatial.transform import Rotation


TO_RADIANS = math.pi / 180.0

TRANSFORM_KINDS = ("matrix", "translate", "rotate", "scale")


def _check_length(src, needed, what, index):
    if len(src) < needed:
        raise ValueError(
            f"Buffer too small for {what} {index}: {len(src)} < {needed}"
        )


def as_mat4(m):
    """Return m as a float64 4x4 array, raising ValueError for other shapes."""
    arr = np.asarray(m, dtype=np.float64)
    if arr.shape != (4, 4):
        raise ValueError(f"Expected a 4x4 matrix, got shape {arr.shape}")
    return arr


def vec3_extract(src, index):
    """Extract the index-th 3D vector from a flat array of vectors.

    Args:
        src: Sequence of floats (list, tuple or numpy array).
        index: Vector index; the vector starts at src[index * 3].

    Returns:
        numpy array of shape (3,).
    """
    off = index * 3
    _check_length(src, off + 3, "vector", index)
    return np.array(src[off:off + 3], dtype=np.float64)


def mat4_extract(src, index, row_major=True):
    """Extract the index-th 4x4 matrix from a flat array of matrices.

    Args:
        src: Sequence of floats holding consecutive 16-float blocks.
        index: Matrix index; the block starts at src[index * 16].
        row_major: True for COLLADA storage (translation in elements
                   3, 7, 11).  False for blocks already stored column-major.

    Returns:
        numpy array of shape (4, 4), translation in the last column.
    """
    off = index * 16
    _check_length(src, off + 16, "matrix", index)
    m = np.array(src[off:off + 16], dtype=np.float64).reshape(4, 4)
    if not row_major:
        m = m.T.copy()
    return m


def mat4_from_values(values, row_major=True):
    """Build a matrix from a single 16-float block."""
    return mat4_extract(values, 0, row_major)


def mat4_to_json(m):
    """Flatten a matrix to a plain column-major list of 16 floats."""
    return [float(v) for v in as_mat4(m).flatten(order="F")]


def quat_from_mat3(m):
    """Convert a 3x3 rotation matrix to a unit quaternion (w, x, y, z).

    The result is kept in the w >= 0 hemisphere.
    """
    m = np.asarray(m, dtype=np.float64)
    if m.shape != (3, 3):
        raise ValueError(f"Expected a 3x3 matrix, got shape {m.shape}")

    x, y, z, w = Rotation.from_matrix(m).as_quat()
    q = np.array([w, x, y, z], dtype=np.float64)
    if q[0] < 0.0:
        q = -q
    return q


def decompose(m):
    """Split a 4x4 transform into translation, rotation and scale.

    Scale is the length of each basis column of the upper-left 3x3 block;
    rotation is the quaternion of that block with its columns normalized.

    The block must be a rotation times a (possibly non-uniform) scale.
    Shear is not detected: a sheared matrix still returns a valid but
    meaningless rotation/scale split.

    Args:
        m: 4x4 matrix (translation in the last column).

    Returns:
        Tuple of (translation, rotation, scale) numpy arrays with shapes
        (3,), (4,) as (w, x, y, z), and (3,).
    """
    m = as_mat4(m)
    translation = m[:3, 3].copy()

    basis = m[:3, :3]
    scale = np.linalg.norm(basis, axis=0)
    # Zero-length axes stay unnormalized
    divisor = np.where(scale > 0.0, scale, 1.0)
    rotation = quat_from_mat3(basis / divisor)

    return translation, rotation, scale


def transform_to_mat4(kind, values, row_major=True):
    """Build the matrix of one COLLADA transform element.

    Args:
        kind: "matrix" (16 floats), "translate" (x, y, z),
              "rotate" (axis x, y, z, angle in degrees) or "scale" (x, y, z).
        values: The element's float values.
        row_major: Storage order for "matrix" elements.

    Returns:
        numpy array of shape (4, 4).
    """
    if kind == "matrix":
        return mat4_from_values(values, row_major)

    m = np.identity(4)
    if kind == "translate":
        m[:3, 3] = vec3_extract(values, 0)
    elif kind == "scale":
        m[0, 0], m[1, 1], m[2, 2] = vec3_extract(values, 0)
    elif kind == "rotate":
        _check_length(values, 4, "rotation", 0)
        axis = np.array(values[0:3], dtype=np.float64)
        length = np.linalg.norm(axis)
        if length == 0.0:
            return m
        angle = float(values[3]) * TO_RADIANS
        m[:3, :3] = Rotation.from_rotvec(axis / length * angle).as_matrix()
    else:
        raise ValueError(f"Unknown transform element: {kind!r}")
    return m
