"""
Service layer.

Each service encapsulates the business logic for a domain.  Services
receive their collaborators (the record store, an HTTP session)
explicitly and raise the errors from ``core.errors``; the API layer
only wires requests to them.
"""
