"""Assembly of the self-contained index page."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .capability import FallbackPolicy
from .presets import DevicePreset

SITE_TITLE = "KYROS"

# Page template and scripts ship next to the package modules
_ASSETS = Path(__file__).resolve().parent / "assets"

_env = Environment(
    loader=FileSystemLoader(str(_ASSETS)),
    autoescape=select_autoescape(["html"]),
)


@lru_cache(maxsize=None)
def _asset(name: str) -> str:
    return (_ASSETS / name).read_text(encoding="utf-8")


def page_config(preset: DevicePreset, policy: FallbackPolicy) -> str:
    """Serialise the preset and fallback policy for embedding in a <script> tag."""
    payload = {
        "preset": preset.model_dump(mode="json"),
        "policy": policy.model_dump(mode="json"),
    }
    return json.dumps(payload, sort_keys=True).replace("</", "<\\/")


def render_index(
    preset: DevicePreset,
    policy: FallbackPolicy | None = None,
    title: str = SITE_TITLE,
) -> str:
    """Render the index page with its scripts inlined.

    The title is HTML-escaped; the config and scripts are emitted verbatim.
    """
    return _env.get_template("index.html").render(
        title=title,
        config=page_config(preset, policy or FallbackPolicy()),
        fallback_js=_asset("fallback.js"),
        scene_js=_asset("scene.js"),
    )
