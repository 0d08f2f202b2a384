"""
newsletter-site: static site server with a newsletter signup endpoint.
"""

__version__ = "0.1.0"
