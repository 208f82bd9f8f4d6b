"""Run the Safari and cross-browser diagnostics against the local server and summarise both reports."""
import subprocess
import sys
import time
from pathlib import Path

import requests

from kyros_site import config
from kyros_site.report import summarize_reports

SCRIPT_DIR = Path(__file__).resolve().parent
URL = config.local_url()
SUITE = ["safari_diagnostics.py", "cross_browser.py"]
REPORTS = [
    config.report_dir() / "safari-diagnostics-report.json",
    config.report_dir() / "cross-browser-report.json",
]


def check_server_running():
    print("Checking if local server is running...")
    try:
        response = requests.get(URL, timeout=5)
        response.raise_for_status()
    except requests.RequestException as e:
        print(f"Local server not running at {URL}: {e}")
        print("Please start it with:")
        print("   python -m kyros_site.main")
        print("   or")
        print("   python -m http.server 3000")
        return False
    print("Local server is running")
    return True


def run_script(name):
    print(f"   Running: {name}")
    subprocess.run([sys.executable, str(SCRIPT_DIR / name)], check=True)


def main():
    start = time.monotonic()
    print("Starting mobile device testing...\n")

    if not check_server_running():
        sys.exit(1)

    try:
        for name in SUITE:
            run_script(name)
    except subprocess.CalledProcessError as e:
        print(f"Test suite failed: {e}")
        sys.exit(1)

    summary = summarize_reports(REPORTS)

    print("\n" + "=" * 60)
    print("MOBILE DEVICE TESTING SUMMARY")
    print("=" * 60)
    print(f"\nTotal test time: {time.monotonic() - start:.1f}s")
    for path in summary.found:
        print(f"   {path}: read")
    for path in summary.missing:
        print(f"   {path}: Not generated")
    for path, err in summary.unreadable.items():
        print(f"   {path}: Could not parse report: {err}")

    if summary.total_tests:
        print(
            f"\nOverall Results: {summary.passed_tests}/{summary.total_tests} tests passed "
            f"({summary.success_rate:.1f}%)"
        )
        if summary.success_rate < 80:
            print("\nMobile compatibility issues detected!")
        else:
            print("\nGood mobile compatibility!")


if __name__ == "__main__":
    main()
