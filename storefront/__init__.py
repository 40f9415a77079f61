"""Storefront backend: checkout sessions, payment webhooks, gated downloads."""
