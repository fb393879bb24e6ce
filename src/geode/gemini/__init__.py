"""Gemini protocol types — Status, Request, Response."""
