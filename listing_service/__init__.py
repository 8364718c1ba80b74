"""
Listing service: property and user records with proximity search.
"""

__version__ = "1.0.0"
