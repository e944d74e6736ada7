# src/xchange/adapters/__init__.py
"""
Adapters Layer - Infrastructure Adapters

This package contains adapters for external systems:
- Remote rate source clients
- Persistence (file, memory)
- Display formatting
"""
