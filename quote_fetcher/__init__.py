"""Fetch a user's public quote collection page by page.

Run ``quote-fetcher fetch <user> [-o quotes.json]`` to list and save quotes.
"""

__version__ = "0.1.0"
