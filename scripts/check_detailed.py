"""Check the live site for errors with stacks, failed requests and 4xx/5xx responses."""
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
    for err in result.error_stacks or result.page_errors:
        print(f"ERROR: {err}")
    for tracked in result.tracked_errors:
        if tracked.get("type") == "unhandledrejection":
            print(f"UNHANDLED REJECTION: {tracked.get('reason')}")

    print("\n=== Failed Requests ===")
    for failed in result.failed_requests:
        print(failed)

    print(f"\nCanvas exists: {result.canvas_present}")


if __name__ == "__main__":
    main()
