"""Take screenshots of the live site before and after the first material change."""
import sys

from kyros_site import config
from kyros_site.profiles import DESKTOP_FULL_HD
from kyros_site.session import Screenshot, SessionOptions, run_session

URL = config.site_url()
OUT = config.screenshot_dir()


def main():
    print("Waiting for initial load...")
    result = run_session(
        SessionOptions(
            url=URL,
            profile=DESKTOP_FULL_HD,
            headless=config.headless(False),
            navigation_timeout_ms=20000,
            settle_ms=5000,
            # Initial state shows the lace material; it changes roughly 8 s later
            screenshots=[
                Screenshot(path=str(OUT / "kyros-lace-actual.png")),
                Screenshot(path=str(OUT / "kyros-after-change.png"), delay_ms=8000),
            ],
        )
    )

    if not result.success:
        print(f"Navigation failed: {result.error}")
        sys.exit(1)

    for path in result.screenshots:
        print(f"Captured {path}")
    print(f"Screenshots saved to {OUT}/")


if __name__ == "__main__":
    main()
