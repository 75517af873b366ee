"""Upstream clients, one module per external API, plus the source registry."""
