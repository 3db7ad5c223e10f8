"""
Storefront API package.

Provides the FastAPI application for the Vortex Cloud storefront.
The application object lives in api.app (``uvicorn api.app:app``).
"""
