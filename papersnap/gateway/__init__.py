"""
API Gateway Module

Builds the FastAPI application: middleware, error handling, routers
and health endpoints.
"""
from .gateway import APIGateway

__all__ = ["APIGateway"]
