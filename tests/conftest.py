"""Global test fixtures and configuration."""

from __future__ import annotations

import logging

import pytest

from dors.gen.models import RenderConfig


@pytest.fixture
def render_config() -> RenderConfig:
	"""Render configuration with every default."""
	return RenderConfig()


@pytest.fixture
def test_logger() -> logging.Logger:
	"""Logger injected into components so records can be asserted with caplog."""
	logger = logging.getLogger("dors.tests")
	logger.setLevel(logging.DEBUG)
	return logger
