"""Test suite for the storefront service.

- unit/: Domain, token store, services and adapters in isolation
- api/: HTTP endpoints through FastAPI TestClient
"""
