"""Pytest configuration and fixtures."""

import logging

import pytest


@pytest.fixture(autouse=True)
def cleanup_loggers():
    """Detach handlers added to perfgate loggers so tests don't leak log files."""
    yield

    for name in list(logging.Logger.manager.loggerDict.keys()):
        if not name.startswith("perfgate"):
            continue
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)


@pytest.fixture
def make_report():
    """Build a report dict from ``{audit_id: audit_result}`` pairs."""

    def _make(
        audits: dict | None = None,
        url: str = "https://example.com/",
        categories: dict | None = None,
    ) -> dict:
        return {
            "finalUrl": url,
            "audits": audits or {},
            "categories": categories or {},
        }

    return _make
