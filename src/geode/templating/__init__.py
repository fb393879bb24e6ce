"""Templating — kida integration for gemtext pages."""
