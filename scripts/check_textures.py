"""Watch texture downloads on the live site and report font/texture loading logs."""
import sys

from kyros_site import config
from kyros_site.collector import lines_matching
from kyros_site.session import SessionOptions, run_session

URL = config.site_url()
TEXTURE_PATTERN = "Fabric_Lace"
LOG_KEYWORDS = ("font", "texture", "load")


def main():
    print(f"Loading {URL}...")
    print("Waiting 10 seconds for textures and fonts to load...")
    result = run_session(
        SessionOptions(
            url=URL,
            headless=config.headless(True),
            navigation_timeout_ms=20000,
            settle_ms=10000,
            watch=[TEXTURE_PATTERN],
        )
    )

    if not result.success:
        print(f"Navigation failed: {result.error}")
        sys.exit(1)

    print("\n=== Lace Texture Loading ===")
    if result.watched_responses:
        for req in result.watched_responses:
            print(req)
    else:
        print("No lace texture requests detected")

    print("\n=== JavaScript Errors ===")
    if result.page_errors:
        for err in result.page_errors:
            print(f"ERROR: {err}")
    else:
        print("No errors")

    print("\n=== Relevant Console Logs ===")
    for log in lines_matching(result.console, *LOG_KEYWORDS):
        print(log)

    print("\n=== Canvas ===")
    print(f"Exists: {result.canvas_present}")


if __name__ == "__main__":
    main()
