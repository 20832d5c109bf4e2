"""Interactive information-retrieval ranking metrics."""

__version__ = "0.1.0"
