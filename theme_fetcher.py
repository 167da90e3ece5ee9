# theme_fetcher.py
"""
Live extraction of the contribution-graph theme from a GitHub profile.

Two fetchers share one contract, fetch(username) -> FetchOutcome:

  BrowserFetcher  renders the profile in headless Chromium (Playwright) and reads
                  computed CSS custom properties in light and dark mode.
  StaticFetcher   downloads the profile HTML and its stylesheets (requests +
                  BeautifulSoup) and resolves the same custom properties from
                  the CSS rules.

Fetch-layer errors never escape fetch(); they come back as a failed outcome.
"""
from __future__ import annotations

import re
import urllib.parse
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import requests
from bs4 import BeautifulSoup
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import sync_playwright

from theme_result import LEVELS, ColorSample, ThemeSignal

GITHUB_URL = 'https://github.com'
GRID_SELECTOR = '.ContributionCalendar-day'
HOLIDAY_ATTR = 'data-holiday'
USER_AGENT = 'Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36'
VIEWPORT = {'width': 1280, 'height': 720}
NAV_TIMEOUT_MS = 20000
GRID_TIMEOUT_MS = 10000
MAX_STYLESHEETS = 40

CHROMIUM_ARGS = [
    '--no-sandbox',
    '--disable-setuid-sandbox',
    '--disable-dev-shm-usage',
    '--disable-gpu',
    '--disable-extensions',
    '--disable-background-networking',
    '--disable-breakpad',
    '--force-color-profile=srgb',
    '--hide-scrollbars',
    '--mute-audio',
    '--no-first-run',
    '--disable-blink-features=AutomationControlled',
]


class ThemeFetchError(Exception):
    """The page loaded but did not have the structure we probe."""


@dataclass(frozen=True)
class FetchOutcome:
    signal: Optional[ThemeSignal] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.signal is not None

    @classmethod
    def succeeded(cls, signal: ThemeSignal) -> 'FetchOutcome':
        return cls(signal=signal)

    @classmethod
    def failed(cls, error: str) -> 'FetchOutcome':
        return cls(error=error or 'unknown fetch error')


def describe_error(exc: BaseException) -> str:
    msg = str(exc).strip().splitlines()
    return f'{type(exc).__name__}: {msg[0]}' if msg else type(exc).__name__


# ---------- Probe names / samples ----------
def normalize_theme(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def probe_variable_names(theme: Optional[str]) -> List[str]:
    """
    Level 0 is always the unthemed background; levels 1..4 follow the theme.
    """
    prefix = normalize_theme(theme) or 'default'
    names = ['--contribution-default-bgColor-0']
    names.extend(f'--contribution-{prefix}-bgColor-{level}' for level in range(1, LEVELS))
    return names


def build_samples(names: Sequence[str], colors: Sequence[Optional[str]]) -> Tuple[ColorSample, ...]:
    if len(names) != LEVELS or len(colors) != LEVELS:
        raise ThemeFetchError(f'expected {LEVELS} color probes, got {len(colors)}')
    samples = []
    for level, (name, color) in enumerate(zip(names, colors)):
        value = (color or '').strip()
        samples.append(ColorSample(level=level, variable=name, color=value or None))
    return tuple(samples)


# ---------- Browser (Playwright) ----------
THEME_SCRIPT = """
() => {
  const el = document.querySelector('[data-holiday]');
  return el ? el.getAttribute('data-holiday') : null;
}
"""

# Reads each variable with the root switched into light, then dark mode.
# The root's color-mode attributes are put back afterwards.
PROBE_SCRIPT = """
(names) => {
  const root = document.documentElement;
  const attrs = ['data-color-mode', 'data-light-theme', 'data-dark-theme'];
  const saved = attrs.map((a) => root.getAttribute(a));
  const read = () => names.map((n) => getComputedStyle(root).getPropertyValue(n).trim() || null);
  const out = {};
  try {
    root.setAttribute('data-color-mode', 'light');
    root.setAttribute('data-light-theme', 'light');
    out.light = read();
    root.setAttribute('data-color-mode', 'dark');
    root.setAttribute('data-dark-theme', 'dark');
    out.dark = read();
  } finally {
    attrs.forEach((a, i) => {
      if (saved[i] === null) {
        root.removeAttribute(a);
      } else {
        root.setAttribute(a, saved[i]);
      }
    });
  }
  return out;
}
"""


class BrowserFetcher:
    def __init__(
        self,
        base_url: str = GITHUB_URL,
        nav_timeout_ms: int = NAV_TIMEOUT_MS,
        grid_timeout_ms: int = GRID_TIMEOUT_MS,
        executable_path: Optional[str] = None,
        headless: bool = True,
    ) -> None:
        self.base_url = base_url.rstrip('/')
        self.nav_timeout_ms = nav_timeout_ms
        self.grid_timeout_ms = grid_timeout_ms
        self.executable_path = executable_path
        self.headless = headless

    def fetch(self, username: str) -> FetchOutcome:
        try:
            return FetchOutcome.succeeded(self._probe(username))
        except (PlaywrightError, ThemeFetchError) as e:
            return FetchOutcome.failed(describe_error(e))

    def _probe(self, username: str) -> ThemeSignal:
        url = f'{self.base_url}/{username}'
        with sync_playwright() as p:
            browser = p.chromium.launch(
                headless=self.headless,
                args=CHROMIUM_ARGS,
                executable_path=self.executable_path,
            )
            try:
                page = browser.new_page(viewport=VIEWPORT, user_agent=USER_AGENT)
                page.goto(url, wait_until='domcontentloaded', timeout=self.nav_timeout_ms)
                page.wait_for_selector(GRID_SELECTOR, timeout=self.grid_timeout_ms)
                theme = normalize_theme(page.evaluate(THEME_SCRIPT))
                names = probe_variable_names(theme)
                colors = page.evaluate(PROBE_SCRIPT, names) or {}
            finally:
                browser.close()
        return ThemeSignal(
            theme_name=theme,
            light_samples=build_samples(names, colors.get('light') or []),
            dark_samples=build_samples(names, colors.get('dark') or []),
        )


# ---------- Static (requests + BeautifulSoup) ----------
CSS_COMMENT_RE = re.compile(r'/\*.*?\*/', re.DOTALL)
CSS_RULE_RE = re.compile(r'([^{}]+)\{([^{}]*)\}')
CSS_VAR_RE = re.compile(r'(--[\w-]+)\s*:\s*([^;}]+)')
THEME_ATTR_RE = re.compile(r'data-(?:light-|dark-)?theme\s*=\s*["\']?([\w-]+)', re.IGNORECASE)
MODE_ATTR_RE = re.compile(r'data-color-mode\s*=\s*["\']?([\w-]+)', re.IGNORECASE)
BASE_SELECTORS = {':root', 'html'}


def find_holiday_attribute(soup: BeautifulSoup) -> Optional[str]:
    el = soup.select_one(f'[{HOLIDAY_ATTR}]')
    if el is None:
        return None
    return normalize_theme(el.get(HOLIDAY_ATTR))


def selector_mode(selector: str) -> Optional[str]:
    """
    Classify one selector as 'light', 'dark' or 'base' (applies to both).
    Selectors for other themes (dimmed, high contrast, ...) give None.
    """
    sel = selector.strip().lower()
    if sel in BASE_SELECTORS:
        return 'base'
    m = THEME_ATTR_RE.search(sel) or MODE_ATTR_RE.search(sel)
    if not m:
        return None
    value = m.group(1)
    if value in ('light', 'dark'):
        return value
    return None


def collect_css_variables(css_texts: Sequence[str]) -> Dict[str, Dict[str, str]]:
    """
    Map mode ('light' / 'dark' / 'base') -> {variable: value}.
    Later declarations override earlier ones, as in the cascade.
    """
    found: Dict[str, Dict[str, str]] = {'light': {}, 'dark': {}, 'base': {}}
    for css in css_texts:
        css = CSS_COMMENT_RE.sub('', css)
        for selector_list, body in CSS_RULE_RE.findall(css):
            declarations = CSS_VAR_RE.findall(body)
            if not declarations:
                continue
            modes = {selector_mode(s) for s in selector_list.split(',')}
            modes.discard(None)
            for mode in modes:
                bucket = found[mode]
                for name, value in declarations:
                    bucket[name] = value.strip()
    return found


def resolve_css_variables(
    css_texts: Sequence[str], names: Sequence[str]
) -> Tuple[List[Optional[str]], List[Optional[str]]]:
    found = collect_css_variables(css_texts)
    light = [found['light'].get(n) or found['base'].get(n) for n in names]
    dark = [found['dark'].get(n) or found['base'].get(n) for n in names]
    return light, dark


class StaticFetcher:
    def __init__(
        self,
        session: Optional[requests.Session] = None,
        base_url: str = GITHUB_URL,
        timeout: float = NAV_TIMEOUT_MS / 1000,
        max_stylesheets: int = MAX_STYLESHEETS,
    ) -> None:
        self.session = session or requests.Session()
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.max_stylesheets = max_stylesheets

    def fetch(self, username: str) -> FetchOutcome:
        try:
            return FetchOutcome.succeeded(self._probe(username))
        except (requests.RequestException, ThemeFetchError) as e:
            return FetchOutcome.failed(describe_error(e))

    def _get(self, url: str) -> str:
        resp = self.session.get(url, headers={'User-Agent': USER_AGENT}, timeout=self.timeout)
        resp.raise_for_status()
        return resp.text

    def _probe(self, username: str) -> ThemeSignal:
        profile_url = f'{self.base_url}/{username}'
        page = BeautifulSoup(self._get(profile_url), 'html.parser')

        # Profiles usually load the calendar as a separate fragment
        grid = page
        if grid.select_one(GRID_SELECTOR) is None:
            fragment_url = f'{self.base_url}/users/{username}/contributions'
            grid = BeautifulSoup(self._get(fragment_url), 'html.parser')
            if grid.select_one(GRID_SELECTOR) is None:
                raise ThemeFetchError(f'contribution grid not found for {username}')

        theme = find_holiday_attribute(grid) or find_holiday_attribute(page)
        names = probe_variable_names(theme)
        light, dark = resolve_css_variables(self._stylesheets(profile_url, page), names)
        return ThemeSignal(
            theme_name=theme,
            light_samples=build_samples(names, light),
            dark_samples=build_samples(names, dark),
        )

    def _stylesheets(self, page_url: str, page: BeautifulSoup) -> List[str]:
        texts: List[str] = [style.get_text() for style in page.find_all('style')]
        hrefs = [link.get('href') for link in page.select('link[rel~=stylesheet][href]')]
        for href in hrefs[: self.max_stylesheets]:
            resolved = urllib.parse.urljoin(page_url, href)
            if urllib.parse.urlparse(resolved).scheme not in ('http', 'https'):
                continue
            try:
                texts.append(self._get(resolved))
            except requests.RequestException:
                # a missing stylesheet only leaves some colors unresolved
                continue
        return texts


FETCHER_KINDS = ('browser', 'static')


def make_fetcher(
    kind: str,
    nav_timeout_ms: int = NAV_TIMEOUT_MS,
    grid_timeout_ms: int = GRID_TIMEOUT_MS,
    executable_path: Optional[str] = None,
):
    if kind == 'browser':
        return BrowserFetcher(
            nav_timeout_ms=nav_timeout_ms,
            grid_timeout_ms=grid_timeout_ms,
            executable_path=executable_path,
        )
    if kind == 'static':
        return StaticFetcher(timeout=nav_timeout_ms / 1000)
    raise ValueError(f'Unknown fetcher {kind!r}; expected one of {", ".join(FETCHER_KINDS)}')
