"""classmarket - Course marketplace: class listing, detail, enrollment and admin."""

__version__ = "0.1.0"
