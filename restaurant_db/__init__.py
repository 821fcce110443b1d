"""Restaurant, menu and item persistence layer backed by SQLAlchemy."""

__version__ = "0.1.0"
