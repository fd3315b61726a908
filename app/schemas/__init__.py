"""
Todo API Schemas.

Pydantic models for request/response validation.
"""

from app.schemas.auth import *
from app.schemas.user import *
from app.schemas.todo import *
