"""Cross-device compatibility run against the local server; writes cross-browser-report.json."""
from kyros_site import config
from kyros_site.profiles import CHROME_GPU_ARGS, CROSS_BROWSER_PROFILES
from kyros_site.probes import DEFAULT_READY_EXPRESSION
from kyros_site.report import build_report, format_report, write_report
from kyros_site.session import SessionOptions, run_session

URL = config.local_url()
REPORT = config.report_dir() / "cross-browser-report.json"
INTERACTION_TARGET = "#military-banner"


def probe_browser_webgl():
    """WebGL capabilities of the automation browser itself, outside any page."""
    result = run_session(
        SessionOptions(
            url="about:blank",
            headless=config.headless(False),
            browser_args=CHROME_GPU_ARGS,
            wait_until="load",
            settle_ms=0,
            probe_webgl=True,
        )
    )
    return result.webgl


def main():
    print("Starting cross-browser compatibility tests...\n")
    results = []
    for profile in CROSS_BROWSER_PROFILES:
        print(f"Testing {profile.name}...")
        result = run_session(
            SessionOptions(
                url=URL,
                profile=profile,
                headless=config.headless(False),
                browser_args=CHROME_GPU_ARGS,
                navigation_timeout_ms=30000,
                ready_expression=DEFAULT_READY_EXPRESSION,
                ready_timeout_ms=15000,
                settle_ms=0,
                probe_webgl=True,
                sample_performance=True,
                stabilize_ms=3000,
                performance_window_ms=10000,
                interact_target=INTERACTION_TARGET,
            )
        )
        if result.success:
            fps = result.frame_rates.average if result.frame_rates else 0.0
            peak = result.memory.peak_mb if result.memory else 0.0
            print(f"   Results: {fps:.1f} FPS, {peak:.1f}MB peak memory")
        else:
            print(f"   Failed: {result.error}")
        results.append(result)

    print("\nTesting WebGL capabilities...")
    webgl = probe_browser_webgl()

    report = build_report("Cross-Browser Compatibility Report", results, webgl_capabilities=webgl)
    print()
    print(format_report(report))
    write_report(report, REPORT)
    print(f"\nDetailed report saved to: {REPORT}")


if __name__ == "__main__":
    main()
