"""Text calendar annotated with events from a plain-text rule file."""

__version__ = "0.1.0"
