"""quotecard - YouTube comment quote card renderer."""

__version__ = "0.1.0"
