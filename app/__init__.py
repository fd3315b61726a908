"""
Todo API application-specific code.

This package contains the Todo-specific implementations:
- database: Collection names and index setup
- services: Credential store, login flow, owner-scoped todo service
- middleware: Request gate for bearer tokens
- schemas: Request/response models
- routers: HTTP endpoints
- config: Application settings

Uses generic infrastructure from the common/ package.
"""

from app.config import settings

__all__ = ["settings"]
