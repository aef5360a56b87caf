"""Test suite package marker so helper modules import as ``tests.*``."""
