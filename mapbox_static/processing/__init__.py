"""Request path and query building."""

from .overlay_renderer import render_label, render_overlay, render_overlays
from .viewpoint import render_viewpoint
from .request_path import build_path, parse_style_url, effective_scale
from .query_params import build_query_items, encode_query, option_query_items

__all__ = [
    "render_label",
    "render_overlay",
    "render_overlays",
    "render_viewpoint",
    "build_path",
    "parse_style_url",
    "effective_scale",
    "build_query_items",
    "encode_query",
    "option_query_items",
]
