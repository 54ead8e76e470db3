from __future__ import annotations

"""
Geometric Value Types.

Fixed-arity coordinate tuples exposed by drawing-like stores. The formatter
recognizes these explicitly and renders their components with fixed
precision instead of treating them as collections.
"""

from typing import NamedTuple, Tuple, Type


class Point2d(NamedTuple):
    x: float
    y: float


class Point3d(NamedTuple):
    x: float
    y: float
    z: float


class Vector2d(NamedTuple):
    x: float
    y: float


class Vector3d(NamedTuple):
    x: float
    y: float
    z: float


GEOMETRY_TYPES: Tuple[Type[tuple], ...] = (Point2d, Point3d, Vector2d, Vector3d)
