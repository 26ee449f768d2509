"""Dual AI Chat: a logical and a creative agent discuss a query over a shared notepad."""

__version__ = "0.1.0"
