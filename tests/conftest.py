"""Pytest configuration and shared fixtures for the adfmd test suite.

This module provides shared fixtures, test configuration, and markers
used across the entire test suite.
"""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

from adfmd.context import IdFactory, sequential_id_factory
from adfmd.parsers.markdown import MarkdownParser
from adfmd.registry import ComponentRegistry, create_default_registry

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=30)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "slow: Slow tests that may take several seconds")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def registry() -> ComponentRegistry:
    """Provide a fresh registry holding every built-in handler."""
    return create_default_registry()


@pytest.fixture
def id_factory() -> IdFactory:
    """Provide a deterministic identifier source (``id-1``, ``id-2``, ...)."""
    return sequential_id_factory()


@pytest.fixture
def parser(registry: ComponentRegistry, id_factory: IdFactory) -> MarkdownParser:
    """Provide a Markdown parser with deterministic identifiers."""
    return MarkdownParser(registry=registry, id_factory=id_factory)


@pytest.fixture
def sample_markdown() -> str:
    """Provide the reference Markdown document used across tests.

    Returns
    -------
    str
        A heading, a paragraph with bold and italic spans, and a task list.

    """
    return """# Title

Some **bold** and *italic* text.

- [ ] todo one
- [x] todo two
"""


@pytest.fixture
def isolated_cwd(tmp_path, monkeypatch):
    """Run the test from an empty directory with ``HOME`` pointing at it.

    Config discovery walks parent directories and the home directory, so
    tests that must not pick up a developer's config run here.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("USERPROFILE", str(tmp_path))
    return tmp_path
