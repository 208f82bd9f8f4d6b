"""Check the local dev server for errors and save a full-page screenshot."""
import sys

from kyros_site import config
from kyros_site.session import Screenshot, SessionOptions, run_session

URL = config.dev_url()
SCREENSHOT = "test-screenshot.png"


def main():
    result = run_session(
        SessionOptions(
            url=URL,
            headless=config.headless(True),
            navigation_timeout_ms=15000,
            settle_ms=10000,
            screenshots=[Screenshot(path=SCREENSHOT, full_page=True)],
        )
    )

    if not result.success:
        print(f"Navigation failed: {result.error}")
        sys.exit(1)

    print("=== Errors ===")
    for err in result.page_errors:
        print(f"ERROR: {err}")
    if not result.page_errors:
        print("No errors")

    print("=== Logs ===")
    for log in result.console:
        print(log)

    if result.page_state:
        print(f"Render mode: {result.page_state.mode} (fallback reason: {result.page_state.fallback_reason})")
    print(f"Screenshot saved as {SCREENSHOT}")


if __name__ == "__main__":
    main()
