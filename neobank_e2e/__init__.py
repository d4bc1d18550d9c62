"""NeoBank end-to-end suite: page objects, helpers and test data for the demo banking UI."""

__version__ = "0.1.0"
