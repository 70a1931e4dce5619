# src/radheat_core/geometry/__init__.py
from .model import (
    Body,
    Geometry,
    Displacement,
    Rotation,
    Transformation,
    TransformationSet,
)
from .parser import GeometryParser, load_geometry, load_transformations
from .exceptions import GeometryFileError, GeometrySchemaError

__all__ = [
    "Body",
    "Geometry",
    "Displacement",
    "Rotation",
    "Transformation",
    "TransformationSet",
    "GeometryParser",
    "load_geometry",
    "load_transformations",
    "GeometryFileError",
    "GeometrySchemaError",
]
