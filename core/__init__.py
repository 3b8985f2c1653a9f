"""
Core module for shared domain infrastructure.

This module contains:
- Domain exceptions and value objects
- Metrics and tracing instrumentation
"""
