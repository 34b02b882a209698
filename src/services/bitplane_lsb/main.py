"""
Main entry point for the bit-plane LSB service

This file provides the main router that can be included in the main FastAPI application.
"""

from .api.routes import router

__all__ = ["router"]
