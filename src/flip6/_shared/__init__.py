# Area: Shared
"""
Shared utilities used by the engine and the CLI.

This package contains:
- Logging configuration
"""
