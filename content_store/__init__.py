"""
Content Store

Multi-site content store with an authenticated key-value core.
"""

__version__ = "0.1.0"
