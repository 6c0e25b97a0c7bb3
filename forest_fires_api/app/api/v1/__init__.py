"""
Version 1 of the API.

This subpackage bundles the forest fires resource and the proxy
endpoints for the first public version of the API.
"""
