"""Renderers for terminal and plain-text reports."""
