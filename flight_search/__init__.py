"""Flight search reference app: airport catalog, route favorites and search session."""

__version__ = "0.1.0"
