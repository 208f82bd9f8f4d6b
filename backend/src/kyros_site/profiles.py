"""Device profiles and Chromium launch arguments used by the diagnostic sessions."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Viewport(BaseModel):
    model_config = ConfigDict(frozen=True)

    width: int
    height: int


class DeviceProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    user_agent: str | None = None
    viewport: Viewport = Viewport(width=1280, height=720)
    device_scale_factor: float = 1
    is_mobile: bool = False
    has_touch: bool = False
    memory_limit_mb: int | None = None

    def context_options(self) -> dict:
        """Keyword arguments for Browser.new_context()."""
        options = {
            "viewport": self.viewport.model_dump(),
            "device_scale_factor": self.device_scale_factor,
            "is_mobile": self.is_mobile,
            "has_touch": self.has_touch,
        }
        if self.user_agent:
            options["user_agent"] = self.user_agent
        return options


_IOS17_UA = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.0 Mobile/15E148 Safari/604.1"
)
_IOS16_UA = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 16_6 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/16.6 Mobile/15E148 Safari/604.1"
)
_IPAD_UA = (
    "Mozilla/5.0 (iPad; CPU OS 17_0 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.0 Mobile/15E148 Safari/604.1"
)
_MAC_SAFARI_UA = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.0 Safari/605.1.15"
)
_MAC_CHROME_UA = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/119.0.0.0 Safari/537.36"
)
_GALAXY_UA = (
    "Mozilla/5.0 (Linux; Android 13; SM-S911B) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/119.0.0.0 Mobile Safari/537.36"
)

DESKTOP_FULL_HD = DeviceProfile(name="Desktop 1080p", viewport=Viewport(width=1920, height=1080))

CROSS_BROWSER_PROFILES: list[DeviceProfile] = [
    DeviceProfile(
        name="iPhone 15 Pro",
        user_agent=_IOS17_UA,
        viewport=Viewport(width=393, height=852),
        device_scale_factor=3,
        is_mobile=True,
        has_touch=True,
        memory_limit_mb=512,
    ),
    DeviceProfile(
        name="iPhone 12",
        user_agent=_IOS16_UA,
        viewport=Viewport(width=390, height=844),
        device_scale_factor=3,
        is_mobile=True,
        has_touch=True,
        memory_limit_mb=256,
    ),
    DeviceProfile(
        name="iPad Pro",
        user_agent=_IPAD_UA,
        viewport=Viewport(width=1024, height=1366),
        device_scale_factor=2,
        is_mobile=True,
        has_touch=True,
        memory_limit_mb=1024,
    ),
    DeviceProfile(
        name="Samsung Galaxy S23",
        user_agent=_GALAXY_UA,
        viewport=Viewport(width=360, height=780),
        device_scale_factor=3,
        is_mobile=True,
        has_touch=True,
        memory_limit_mb=1024,
    ),
    DeviceProfile(
        name="Desktop Chrome",
        user_agent=_MAC_CHROME_UA,
        viewport=Viewport(width=1920, height=1080),
        device_scale_factor=1,
        memory_limit_mb=4096,
    ),
    DeviceProfile(
        name="Desktop Safari",
        user_agent=_MAC_SAFARI_UA,
        viewport=Viewport(width=1920, height=1080),
        device_scale_factor=2,
        memory_limit_mb=4096,
    ),
]

SAFARI_PROFILES: list[DeviceProfile] = [
    DeviceProfile(
        name="Safari Desktop (Latest)",
        user_agent=_MAC_SAFARI_UA,
        viewport=Viewport(width=1920, height=1080),
        device_scale_factor=2,
    ),
    DeviceProfile(
        name="Safari Mobile iOS 17",
        user_agent=_IOS17_UA,
        viewport=Viewport(width=375, height=812),
        device_scale_factor=3,
        is_mobile=True,
        has_touch=True,
    ),
    DeviceProfile(
        name="Safari Mobile iOS 16",
        user_agent=_IOS16_UA,
        viewport=Viewport(width=375, height=812),
        device_scale_factor=3,
        is_mobile=True,
        has_touch=True,
    ),
    DeviceProfile(
        name="Safari iPad",
        user_agent=_IPAD_UA,
        viewport=Viewport(width=1024, height=768),
        device_scale_factor=2,
        is_mobile=True,
        has_touch=True,
    ),
]

# Sandboxing and compositor flags for running Chromium under automation
CHROME_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-web-security",
    "--disable-features=VizDisplayCompositor",
]
CHROME_GPU_ARGS = CHROME_ARGS + ["--enable-gpu-rasterization", "--enable-zero-copy"]
