"""
Parsing utilities for MOPS responses.

This package contains modules for:
- Normalizing listing row keys to canonical camelCase
- Building detail page addresses and extracting their disclosure table
"""
