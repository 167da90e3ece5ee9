"""Pytest configuration and fixtures."""

import pytest

from theme_result import ColorSample, ThemeSignal


def make_samples(theme="default", colors=None):
    colors = colors or ["#ebedf0", "#9be9a8", "#40c463", "#30a14e", "#216e39"]
    names = ["--contribution-default-bgColor-0"] + [
        f"--contribution-{theme}-bgColor-{level}" for level in range(1, 5)
    ]
    return tuple(
        ColorSample(level=level, variable=name, color=color)
        for level, (name, color) in enumerate(zip(names, colors))
    )


@pytest.fixture
def light_samples():
    """Five light-mode samples, all colors present."""
    return make_samples()


@pytest.fixture
def dark_samples():
    """Five dark-mode samples, all colors present."""
    return make_samples(colors=["#161b22", "#0e4429", "#006d32", "#26a641", "#39d353"])


@pytest.fixture
def halloween_signal():
    """Live signal carrying the halloween theme."""
    return ThemeSignal(
        theme_name="halloween",
        light_samples=make_samples("halloween", ["#ebedf0", "#ffee4a", "#ffc501", "#fe9600", "#03001c"]),
        dark_samples=make_samples("halloween", ["#161b22", "#631c03", "#bd561d", "#fa7a18", "#fddf68"]),
    )


@pytest.fixture
def no_theme_signal(light_samples, dark_samples):
    """Live signal from a page without a data-holiday attribute."""
    return ThemeSignal(theme_name=None, light_samples=light_samples, dark_samples=dark_samples)
