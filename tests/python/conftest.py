# Copyright 2025 Wahyu Ardiansyah
# Licensed under the Apache License, Version 2.0

"""
Pytest configuration for evalbridge Python tests.
"""

import sys
from pathlib import Path

import pytest

# Add the project root to sys.path so we can import evalbridge
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

# Skip test modules that require optional dependencies not installed
collect_ignore = []

# Check for hypothesis
try:
    import hypothesis
except ImportError:
    collect_ignore.append("test_property_based.py")


@pytest.fixture(autouse=True)
def _quiet_logger(monkeypatch):
    """Keep the structured logger at defaults and off the test output."""
    from evalbridge.observability import EvalLogger

    monkeypatch.delenv("EVALBRIDGE_VERBOSITY", raising=False)
    monkeypatch.delenv("EVALBRIDGE_DEVICE", raising=False)
    monkeypatch.delenv("EVALBRIDGE_STRICT", raising=False)
    EvalLogger.reset()
    yield
    EvalLogger.reset()
