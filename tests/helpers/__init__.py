"""Test helper modules for the eventgraph test suite.

- io_utils: writing YAML graph definitions and config overlays
- resolvers: importable resolver callables referenced from YAML definitions
"""
from __future__ import annotations
