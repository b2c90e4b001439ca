"""Strategy module for automated players."""

from racko.strategy.base import PileChoice, Strategy
from racko.strategy.guide import GuideValueStrategy

__all__ = ["PileChoice", "Strategy", "GuideValueStrategy"]
