"""Shared test configuration and fixtures for the changes test suite."""

import sys
from pathlib import Path

import pytest

# Add backend to Python path so imports work
backend_dir = str(Path(__file__).parent.parent / "backend")
if backend_dir not in sys.path:
    sys.path.insert(0, backend_dir)


@pytest.fixture(scope="session")
def project_root():
    return Path(__file__).parent.parent


@pytest.fixture(scope="session")
def corpus_dir(project_root):
    return project_root / "tests" / "corpus"
