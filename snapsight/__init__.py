"""
SnapSight application: root package.

This package contains the FastAPI app entry point (main.py), API routes,
domain logic, infrastructure (MongoDB, blob storage, vision API client),
and the static gallery page.
"""
