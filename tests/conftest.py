"""
Shared fixtures.

config.settings.LOGGING sets propagate=False on the "pos" logger, so
caplog (which listens on the root logger) sees nothing from pos.*
unless propagation is switched back on for the test.
"""

import logging

import pytest


@pytest.fixture
def pos_caplog(caplog, monkeypatch):
    monkeypatch.setattr(logging.getLogger("pos"), "propagate", True)
    return caplog
