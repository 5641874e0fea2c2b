"""
Demo profile data for development and search examples.
"""

from .profiles import DemoProfileDetail, DemoProfileProvider, DemoProfileSummary

__all__ = ["DemoProfileDetail", "DemoProfileProvider", "DemoProfileSummary"]
