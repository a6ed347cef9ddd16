"""Color-picker demo page served at the root path."""

from .pages import (
    load_colors,
    load_seo,
    lookup_color,
    normalize_color_name,
    random_color,
    render_index,
)

__all__ = [
    "load_colors",
    "load_seo",
    "lookup_color",
    "normalize_color_name",
    "random_color",
    "render_index",
]
