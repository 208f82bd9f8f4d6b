"""Safari-profile crash diagnostics against the local server; writes safari-diagnostics-report.json."""
from kyros_site import config
from kyros_site.collector import lines_matching
from kyros_site.profiles import CHROME_ARGS, SAFARI_PROFILES
from kyros_site.probes import DEFAULT_READY_EXPRESSION
from kyros_site.report import build_report, format_report, write_report
from kyros_site.session import SessionOptions, run_session

URL = config.local_url()
REPORT = config.report_dir() / "safari-diagnostics-report.json"
INTERACTION_TARGET = "#military-banner"
WARNING_KEYWORDS = ("WebGL", "memory", "crash")


def main():
    print("Testing Safari compatibility and crash points...\n")
    results = []
    for profile in SAFARI_PROFILES:
        print(f"Testing: {profile.name}")
        result = run_session(
            SessionOptions(
                url=URL,
                profile=profile,
                headless=config.headless(False),
                browser_args=CHROME_ARGS,
                navigation_timeout_ms=30000,
                ready_expression=DEFAULT_READY_EXPRESSION,
                ready_timeout_ms=15000,
                settle_ms=0,
                probe_webgl=True,
                sample_performance=True,
                stabilize_ms=0,
                performance_window_ms=11000,
                interact_target=INTERACTION_TARGET if profile.has_touch else None,
            )
        )
        if result.success:
            print(f"   Loaded successfully in {result.load_time_ms}ms")
            if result.frame_rates and result.frame_rates.samples and result.frame_rates.average < 30:
                print("   Low frame rate detected - may cause crashes on mobile")
            if result.memory and result.memory.high_usage:
                print("   High memory usage detected - risk of crashes")
        else:
            print(f"   Failed to load: {result.error}")
        for line in lines_matching(result.console, *WARNING_KEYWORDS):
            print(f"   Safari Warning: {line}")
        results.append(result)

    report = build_report("Safari Compatibility Report", results)
    print()
    print(format_report(report))
    write_report(report, REPORT)
    print(f"\nDetailed report saved to: {REPORT}")


if __name__ == "__main__":
    main()
