"""Check the live site's browser console for errors and confirm a canvas rendered."""
import sys

from kyros_site import config
from kyros_site.session import SessionOptions, run_session

URL = config.site_url()


def main():
    result = run_session(
        SessionOptions(
            url=URL,
            headless=config.headless(True),
            navigation_timeout_ms=15000,
            settle_ms=5000,
        )
    )

    if not result.success:
        print(f"Navigation failed: {result.error}")
        sys.exit(1)

    print("=== Console Logs ===")
    for log in result.console:
        print(log)

    print("\n=== Errors ===")
    if result.page_errors:
        for err in result.page_errors:
            print(f"ERROR: {err}")
    else:
        print("No errors")

    print(f"\nCanvas exists: {result.canvas_present}")


if __name__ == "__main__":
    main()
