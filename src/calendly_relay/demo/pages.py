"""
Color-picker demo page.

The page is a static HTML template with ``{{PLACEHOLDER}}`` markers filled in
per request. All inserted values are HTML-escaped.
"""

import html
import json
import random
import re
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

DEMO_DIR = Path(__file__).parent
TEMPLATE_PATH = DEMO_DIR / "templates" / "index.html"
COLORS_PATH = DEMO_DIR / "colors.json"
SEO_PATH = DEMO_DIR / "seo.json"

GLITCH_DEFAULT_URL = "glitch-default"


@lru_cache(maxsize=1)
def load_colors() -> Dict[str, str]:
    with open(COLORS_PATH, "r", encoding="utf-8") as f:
        return json.load(f)


def load_seo(project_domain: str = "") -> Dict[str, Any]:
    """Load SEO metadata, resolving the placeholder URL from the project domain."""
    with open(SEO_PATH, "r", encoding="utf-8") as f:
        seo = json.load(f)
    if seo.get("url") == GLITCH_DEFAULT_URL:
        seo["url"] = f"https://{project_domain}.glitch.me"
    return seo


def normalize_color_name(name: str) -> str:
    return re.sub(r"\s", "", name.lower())


def random_color() -> str:
    colors = load_colors()
    return colors[random.choice(list(colors))]


def lookup_color(name: str) -> Optional[str]:
    return load_colors().get(normalize_color_name(name))


def _color_block(color: Optional[str], color_error: Optional[str]) -> str:
    if color:
        escaped = html.escape(color)
        return (
            f'<div class="color-result" style="background-color: {escaped}">'
            f'<p>Here\'s your color: <strong>{escaped}</strong></p></div>'
        )
    if color_error:
        return (
            '<p class="color-error">Sorry, we don\'t know the color '
            f'<em>{html.escape(color_error)}</em>. Try another name!</p>'
        )
    return '<p class="color-prompt">Pick a color name, or hit randomize.</p>'


def render_index(seo: Dict[str, Any], color: Optional[str] = None,
                 color_error: Optional[str] = None) -> str:
    """Render the demo page for the given color state."""
    with open(TEMPLATE_PATH, "r", encoding="utf-8") as f:
        page = f.read()

    replacements = {
        "{{SEO_TITLE}}": html.escape(str(seo.get("title", ""))),
        "{{SEO_DESCRIPTION}}": html.escape(str(seo.get("description", ""))),
        "{{SEO_URL}}": html.escape(str(seo.get("url", ""))),
        "{{SEO_IMAGE}}": html.escape(str(seo.get("image", ""))),
        "{{COLOR_BLOCK}}": _color_block(color, color_error),
    }
    for marker, value in replacements.items():
        page = page.replace(marker, value)
    return page
