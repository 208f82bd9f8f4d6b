"""Device-class quality presets selected once per page load."""

from __future__ import annotations

import re
from enum import Enum
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict

_MOBILE_RE = re.compile(r"iPhone|iPad|iPod|Android", re.IGNORECASE)
_IOS_RE = re.compile(r"iPad|iPhone|iPod")
_SAFARI_RE = re.compile(r"^((?!chrome|android).)*safari", re.IGNORECASE)


class DeviceClass(str, Enum):
    DESKTOP = "desktop"
    MOBILE = "mobile"
    IOS = "ios"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class DeviceSignals(_Frozen):
    is_mobile: bool
    is_ios: bool
    is_safari: bool
    device_class: DeviceClass


class RendererOptions(_Frozen):
    antialias: bool
    alpha: bool = False
    power_preference: str = "high-performance"
    precision: str | None = None
    logarithmic_depth_buffer: bool | None = None
    stencil: bool | None = None
    depth: bool | None = None


class CameraSettings(_Frozen):
    fov: float
    near: float
    far: float
    position: tuple[float, float, float]


class LightSettings(_Frozen):
    color: int
    intensity: float
    distance: float | None = None


class LightingSettings(_Frozen):
    sun: LightSettings
    ambient: LightSettings
    rim: LightSettings
    text: LightSettings


class QualityPreset(_Frozen):
    pixel_ratio_cap: float
    star_count: int
    max_texture_size: int
    texture_quality: str
    enable_shadows: bool
    shadow_map_size: int
    max_lights: int
    enable_post_processing: bool = False
    renderer: RendererOptions
    camera: CameraSettings
    lighting: LightingSettings


class DevicePreset(_Frozen):
    """A quality bundle resolved against the observed pixel ratio."""

    device_class: DeviceClass
    pixel_ratio: float
    memory_limit_mb: int
    context_loss_protection: bool
    quality: QualityPreset


_MOBILE_RENDERER = RendererOptions(
    antialias=False,
    precision="mediump",
    logarithmic_depth_buffer=False,
    stencil=False,
    depth=True,
)
_MOBILE_CAMERA = CameraSettings(fov=45, near=0.1, far=1000, position=(0, 0, 22))
_MOBILE_LIGHTING = LightingSettings(
    sun=LightSettings(color=0xFFFFFF, intensity=4),
    ambient=LightSettings(color=0xFFFFFF, intensity=0.3),
    rim=LightSettings(color=0xD4E5FF, intensity=3),
    text=LightSettings(color=0xFFF8E7, intensity=3, distance=25),
)


def _mobile_preset(star_count: int) -> QualityPreset:
    return QualityPreset(
        pixel_ratio_cap=1,
        star_count=star_count,
        max_texture_size=512,
        texture_quality="medium",
        enable_shadows=False,
        shadow_map_size=512,
        max_lights=3,
        renderer=_MOBILE_RENDERER,
        camera=_MOBILE_CAMERA,
        lighting=_MOBILE_LIGHTING,
    )


PRESETS = MappingProxyType({
    DeviceClass.DESKTOP: QualityPreset(
        pixel_ratio_cap=2,
        star_count=400,
        max_texture_size=2048,
        texture_quality="high",
        enable_shadows=True,
        shadow_map_size=2048,
        max_lights=8,
        renderer=RendererOptions(antialias=True),
        camera=CameraSettings(fov=60, near=1, far=2000, position=(0, 0, 28)),
        lighting=LightingSettings(
            sun=LightSettings(color=0xFFFFFF, intensity=8),
            ambient=LightSettings(color=0xFFFFFF, intensity=0.4),
            rim=LightSettings(color=0xD4E5FF, intensity=6),
            text=LightSettings(color=0xFFF8E7, intensity=5, distance=30),
        ),
    ),
    DeviceClass.MOBILE: _mobile_preset(star_count=200),
    DeviceClass.IOS: _mobile_preset(star_count=150),
})


def classify_device(user_agent: str | None) -> DeviceSignals:
    """Derive coarse device flags from a user-agent string.

    Unknown or empty strings classify as desktop.
    """
    ua = user_agent or ""
    is_mobile = bool(_MOBILE_RE.search(ua))
    is_ios = bool(_IOS_RE.search(ua))
    is_safari = bool(_SAFARI_RE.search(ua))
    if is_ios:
        device_class = DeviceClass.IOS
    elif is_mobile:
        device_class = DeviceClass.MOBILE
    else:
        device_class = DeviceClass.DESKTOP
    return DeviceSignals(
        is_mobile=is_mobile,
        is_ios=is_ios,
        is_safari=is_safari,
        device_class=device_class,
    )


def estimate_memory_limit_mb(signals: DeviceSignals, device_pixel_ratio: float) -> int:
    if signals.is_ios:
        if device_pixel_ratio >= 3:
            return 512
        if device_pixel_ratio >= 2:
            return 256
        return 128
    return 1024


def select_preset(user_agent: str | None, device_pixel_ratio: float | None = 1.0) -> DevicePreset:
    """Pick the quality bundle for a client. The decision is never revisited."""
    dpr = device_pixel_ratio if device_pixel_ratio and device_pixel_ratio > 0 else 1.0
    signals = classify_device(user_agent)
    quality = PRESETS[signals.device_class]
    return DevicePreset(
        device_class=signals.device_class,
        pixel_ratio=min(dpr, quality.pixel_ratio_cap),
        memory_limit_mb=estimate_memory_limit_mb(signals, dpr),
        context_loss_protection=signals.is_safari,
        quality=quality,
    )
