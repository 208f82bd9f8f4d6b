"""REST API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Header, HTTPException, Query
from fastapi.responses import HTMLResponse

from .capability import FallbackPolicy, WebGLProbe, evaluate_probe
from .presets import select_preset
from .site import render_index

router = APIRouter(prefix="/api")
pages = APIRouter()

# Set during app startup (see main.py)
policy: FallbackPolicy | None = None
version: str = "0.0.0"


def _policy() -> FallbackPolicy:
    if policy is None:
        raise HTTPException(500, "Fallback policy not initialized")
    return policy


@pages.get("/", response_class=HTMLResponse)
async def index(
    dpr: float = Query(default=1.0, gt=0, le=8),
    user_agent: str | None = Header(default=None),
):
    """Landing page with the preset for the requesting device baked in."""
    preset = select_preset(user_agent, dpr)
    return HTMLResponse(render_index(preset, _policy()))


@router.get("/status")
async def status():
    return {
        "data": {"service": "kyros-site", "version": version, "policy": _policy().model_dump()},
        "error": None,
    }


@router.get("/preset")
async def get_preset(
    dpr: float = Query(default=1.0, gt=0, le=8),
    ua: str | None = Query(default=None, alias="user_agent"),
    user_agent: str | None = Header(default=None),
):
    """Quality preset for an explicit user agent, or the caller's own."""
    preset = select_preset(ua if ua is not None else user_agent, dpr)
    return {"data": preset.model_dump(mode="json"), "error": None}


@router.post("/capability")
async def check_capability(probe: WebGLProbe):
    """Evaluate a client-side WebGL probe against the fallback policy."""
    decision = evaluate_probe(probe, _policy())
    return {"data": decision.model_dump(mode="json"), "error": None}
