"""Island terrain meshing.

This package turns island parameters into triangle meshes: density
sampling, field smoothing with normal estimation, and marching cubes
polygonization of chunk volumes.
"""

from .cells import CellGrid, assemble_cells, polygonize_cells
from .field import ScalarField, sample_chunk_field
from .mesh import MeshBuffer
from .noise import GradientNoise3D
from .polygonizer import Cell, Triangle, polygonize
from .presets import PRESETS, choose_terrain, get_preset
from .sampler import sample_density, sample_density_field
from .smoothing import SmoothedField, pad_field, smooth_field

__all__ = [
    "PRESETS",
    "Cell",
    "CellGrid",
    "GradientNoise3D",
    "MeshBuffer",
    "ScalarField",
    "SmoothedField",
    "Triangle",
    "assemble_cells",
    "choose_terrain",
    "get_preset",
    "pad_field",
    "polygonize",
    "polygonize_cells",
    "sample_chunk_field",
    "sample_density",
    "sample_density_field",
    "smooth_field",
]
