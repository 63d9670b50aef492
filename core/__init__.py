"""
Core module for shared domain infrastructure.

This module contains:
- Domain exceptions, value objects and key hashing
- Rate limiter and audit log ports with their Django adapters
- Middleware components and Prometheus metrics
"""
