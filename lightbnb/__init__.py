"""
LightBnB data access layer.
Parameterized async queries over users, properties, reservations and reviews.
"""

__version__ = "1.0.0"
