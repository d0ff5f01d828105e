"""Strip the profile field from every record of a JSON results array."""

__version__ = "1.0.0"
