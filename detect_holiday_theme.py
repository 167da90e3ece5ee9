#!/usr/bin/env python3
# detect_holiday_theme.py (live CSS probe with calendar fallback)
import argparse
import json
import os
import sys
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Callable, Optional, Protocol, Sequence

from holiday import holiday_by_date, parse_date_iso
from theme_fetcher import FETCHER_KINDS, GRID_TIMEOUT_MS, NAV_TIMEOUT_MS, FetchOutcome, describe_error, make_fetcher
from theme_result import DEFAULT_THEME, ColorSample, DetectionMethod, DetectionResult, build_result
from github_output import GitHubOutputWriter

DEFAULT_USERNAME = 'octocat'


class ThemeFetcher(Protocol):
    def fetch(self, username: str) -> FetchOutcome: ...


@dataclass(frozen=True)
class DetectorConfig:
    username: str
    skip_live: bool = False
    verbose: bool = True


# ---------- Detection orchestration ----------
class HolidayThemeDetector:
    def __init__(
        self,
        config: DetectorConfig,
        fetcher: Optional[ThemeFetcher] = None,
        clock: Callable[[], date] = date.today,
    ) -> None:
        if fetcher is None and not config.skip_live:
            raise ValueError('A fetcher is required unless skip_live is set')
        self.config = config
        self.fetcher = fetcher
        self.clock = clock

    def _say(self, msg: str = '') -> None:
        if self.config.verbose:
            print(msg)

    def _say_samples(self, label: str, samples: Sequence[ColorSample]) -> None:
        self._say(f'  {label} theme grid colors:')
        for s in samples:
            self._say(f'    Level {s.level}: {s.color} ({s.variable})')

    def detect(self) -> DetectionResult:
        """
        Live probe first. A failed probe falls back to the calendar; a probe that
        succeeds without a theme attribute is a confident 'default' result.
        """
        self._say(f'Detecting holiday theme for GitHub user: {self.config.username}')
        self._say(f'Timestamp: {datetime.now(timezone.utc).isoformat()}')

        if self.config.skip_live:
            return self._detect_by_date()

        self._say('')
        self._say('=== Method 1: CSS Variable Detection ===')
        outcome = self._fetch()

        if outcome.ok:
            signal = outcome.signal
            if signal.theme_name:
                self._say(f'✓ Detected holiday: {signal.theme_name}')
                theme = signal.theme_name
            else:
                self._say('✗ No holiday attribute found, using default colors')
                theme = DEFAULT_THEME
            self._say_samples('Light', signal.light_samples)
            self._say_samples('Dark', signal.dark_samples)
            return build_result(theme, DetectionMethod.css_variable, signal.light_samples, signal.dark_samples)

        print(f'Live extraction failed: {outcome.error}', file=sys.stderr)
        self._say('')
        self._say('=== Fallback: Date-based detection ===')
        label = holiday_by_date(self.clock())
        if label:
            self._say(f'✓ Date fallback: {label}')
            return build_result(label, DetectionMethod.date_fallback)
        self._say('✗ No holiday period matches today')
        return build_result(DEFAULT_THEME, DetectionMethod.error)

    def _fetch(self) -> FetchOutcome:
        try:
            return self.fetcher.fetch(self.config.username)
        except Exception as e:
            return FetchOutcome.failed(describe_error(e))

    def _detect_by_date(self) -> DetectionResult:
        self._say('')
        self._say('=== Date-based holiday detection ===')
        label = holiday_by_date(self.clock())
        if label:
            self._say(f'✓ Current date matches {label} period')
            return build_result(label, DetectionMethod.date)
        self._say('✗ No holiday theme detected')
        return build_result(DEFAULT_THEME, DetectionMethod.none)


# ---------- CLI main ----------
def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description='Detect the holiday theme of a GitHub contribution graph.')
    ap.add_argument(
        'username',
        nargs='?',
        help=f'GitHub username (default: $GITHUB_USERNAME or {DEFAULT_USERNAME})',
    )
    ap.add_argument('--date', help='YYYY-MM-DD used by the calendar fallback (default: today)')
    ap.add_argument('--skip-live', action='store_true', help='Do not load the page; use the calendar only')
    ap.add_argument(
        '--fetcher',
        choices=FETCHER_KINDS,
        default=os.getenv('HOLIDAY_FETCHER', 'browser'),
        help='Live extraction backend (default: $HOLIDAY_FETCHER or browser)',
    )
    ap.add_argument('--nav-timeout', type=int, default=NAV_TIMEOUT_MS, help='Page load timeout in ms')
    ap.add_argument('--grid-timeout', type=int, default=GRID_TIMEOUT_MS, help='Contribution grid wait in ms')
    ap.add_argument('--chromium-path', default=os.getenv('CHROMIUM_PATH'), help='Chromium executable to launch')
    ap.add_argument('--github-output', help='File to append key=value results to (default: $GITHUB_OUTPUT)')
    ap.add_argument('--quiet', action='store_true', help='Only print the final JSON result')
    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)

    clock: Callable[[], date] = date.today
    if args.date:
        try:
            fixed = parse_date_iso(args.date)
        except ValueError:
            print('Invalid --date format. Use YYYY-MM-DD.', file=sys.stderr)
            return 2
        clock = lambda: fixed  # noqa: E731

    if args.fetcher not in FETCHER_KINDS:
        print(f'Invalid fetcher {args.fetcher!r}; expected one of {", ".join(FETCHER_KINDS)}', file=sys.stderr)
        return 2

    username = args.username or os.getenv('GITHUB_USERNAME') or DEFAULT_USERNAME
    config = DetectorConfig(username=username, skip_live=args.skip_live, verbose=not args.quiet)

    try:
        fetcher = None
        if not config.skip_live:
            fetcher = make_fetcher(
                args.fetcher,
                nav_timeout_ms=args.nav_timeout,
                grid_timeout_ms=args.grid_timeout,
                executable_path=args.chromium_path,
            )
        result = HolidayThemeDetector(config, fetcher, clock=clock).detect()
    except Exception as e:
        print(f'Holiday detection crashed: {describe_error(e)}', file=sys.stderr)
        return 1

    writer = GitHubOutputWriter(args.github_output)
    if writer.is_configured() and not writer.write(result):
        print('Continuing without GitHub output; the result below is still valid.', file=sys.stderr)

    if config.verbose:
        print('')
        print('=== Detection Result ===')
    print(json.dumps(result.to_dict(), indent=2))
    return 0


if __name__ == '__main__':
    sys.exit(main())
