"""
Top‑level package for the Forest Fires API.

This file makes ``forest_fires_api`` a Python package so that modules
within ``app`` can be imported using fully qualified names like
``forest_fires_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
