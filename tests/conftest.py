"""Shared pytest setup: Hypothesis profiles, the fuzz marker, locale fixtures.

Hypothesis profiles:
    dev      500 examples, random seed (default locally)
    ci       50 examples, derandomized (chosen when CI=true)
    verbose  100 examples with per-example output

HYPOTHESIS_PROFILE=<name> overrides the choice. Tests marked
@pytest.mark.fuzz only run under `pytest -m fuzz`.
"""

import json
import os
from pathlib import Path

import pytest
from hypothesis import HealthCheck, Phase, Verbosity, settings

_PHASES = [Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink]
# write_locale and lang_dir are function-scoped; each example overwrites the same files
_SUPPRESSED = [HealthCheck.function_scoped_fixture]

settings.register_profile(
    "dev", max_examples=500, phases=_PHASES, suppress_health_check=_SUPPRESSED
)
settings.register_profile(
    "ci",
    max_examples=50,
    phases=_PHASES,
    derandomize=True,
    print_blob=True,
    suppress_health_check=_SUPPRESSED,
)
settings.register_profile(
    "verbose",
    max_examples=100,
    phases=_PHASES,
    verbosity=Verbosity.verbose,
    suppress_health_check=_SUPPRESSED,
)

_PROFILES = ("dev", "ci", "verbose")


def _profile_name() -> str:
    requested = os.environ.get("HYPOTHESIS_PROFILE", "")
    if requested in _PROFILES:
        return requested
    return "ci" if os.environ.get("CI") == "true" else "dev"


settings.load_profile(_profile_name())


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "fuzz: long-running property tests, run with -m fuzz")


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip fuzz tests unless the -m expression names them."""
    if "fuzz" in str(config.getoption("-m", default="")):
        return
    skip = pytest.mark.skip(reason="fuzz test; run with: pytest -m fuzz")
    for item in items:
        if "fuzz" in item.keywords:
            item.add_marker(skip)


# =============================================================================
# LOCALE DIRECTORY
# =============================================================================


@pytest.fixture
def lang_dir(tmp_path: Path) -> Path:
    """Empty locale directory under tmp_path."""
    directory = tmp_path / "lang"
    directory.mkdir()
    return directory


@pytest.fixture
def write_locale(lang_dir: Path):
    """write_locale("en", {...}) writes lang/en.json and returns its path."""

    def write(locale: str, tree: object) -> Path:
        path = lang_dir / f"{locale}.json"
        path.write_text(json.dumps(tree, ensure_ascii=False), encoding="utf-8")
        return path

    return write
