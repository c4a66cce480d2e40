"""
Output generation.

This package renders aggregation results as Markdown or JSON.
"""

from .renderer import render_json, render_markdown

__all__ = ["render_json", "render_markdown"]
