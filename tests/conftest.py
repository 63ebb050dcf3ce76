"""Pytest configuration and fixtures."""

import os
from pathlib import Path

import pytest

from lexdialogue.config import reset_settings

# Import CLI fixtures to make them available globally
from tests.cli_fixtures import cli_invoke, write_script  # noqa: F401

SAMPLE_SCRIPT = """\
// Sample dialogue used across the test suite
@Oscar
name: Oscar Cooke-Abbott
age: 26

$visits: 0
!roll_dice(sides=6): 1

/// Session started
#Intro
@oscar: Hello there.
Narrator: The room is quiet.
- Say hello
- Leave
$visits = 1
=><= Aside
@oscar: Where was I?
=> Outro

#Aside
An aside, then back.

#Outro
Goodbye.
"""


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test",
    )
    config.addinivalue_line(
        "markers",
        "unit: mark test as unit test",
    )


@pytest.fixture(autouse=True)
def reset_global_settings():
    """Reset global settings state so tests never share configuration."""
    saved = {k: v for k, v in os.environ.items() if k.startswith("LEXDIALOGUE_")}
    for key in saved:
        del os.environ[key]
    reset_settings()

    yield

    for key in [k for k in os.environ if k.startswith("LEXDIALOGUE_")]:
        del os.environ[key]
    os.environ.update(saved)
    reset_settings()


@pytest.fixture
def sample_script() -> str:
    """Return a script exercising every construct."""
    return SAMPLE_SCRIPT


@pytest.fixture
def sample_script_path(tmp_path: Path) -> Path:
    """Write the sample script to a temporary file."""
    path = tmp_path / "sample.lex"
    path.write_text(SAMPLE_SCRIPT, encoding="utf-8")
    return path
