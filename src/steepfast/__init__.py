"""STEEP & FAST ロゴの手続き的レンダラ。"""

from steepfast.core.fit import FitTransform, composition_bbox, compute_fit
from steepfast.core.geometry import AABB, Rect, aabb_from_points, plaque_corners
from steepfast.core.layout import LogoLayout, MotifPads, PlaqueSpec, default_layout
from steepfast.core.pipeline import Frame, render_frame

__all__ = [
    "AABB",
    "FitTransform",
    "Frame",
    "LogoLayout",
    "MotifPads",
    "PlaqueSpec",
    "Rect",
    "aabb_from_points",
    "composition_bbox",
    "compute_fit",
    "default_layout",
    "plaque_corners",
    "render_frame",
]
