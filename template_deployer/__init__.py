"""Compile tiered construction templates and deploy them to a Notion workspace."""

__version__ = "1.0.0"
