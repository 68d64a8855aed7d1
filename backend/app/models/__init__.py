"""SQLAlchemy models exposed by the backend."""
from .base import Base
from .employee import Employee

__all__ = ["Base", "Employee"]
