"""Capture inbox processing."""
from .processor import CATEGORIES, CaptureItem, CaptureProcessor, parse_category

__all__ = ["CATEGORIES", "CaptureItem", "CaptureProcessor", "parse_category"]
