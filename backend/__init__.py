"""Backend package for the Angler encounter API.

This package provides the FastAPI web server that hosts encounter sessions
over HTTP.
"""

__version__ = "1.0.0"
