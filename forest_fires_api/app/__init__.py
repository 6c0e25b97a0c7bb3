"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules: ``core`` (settings, logging, errors and the record store),
``schemas`` (wire models), ``services`` (business logic) and ``api``
(versioned routers).
"""

from .main import app  # noqa: F401
