"""Shared utilities: telemetry and cross-cutting helpers.

Used by the domain and infrastructure layers. No cache logic.
"""
