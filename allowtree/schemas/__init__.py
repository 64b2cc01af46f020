"""
Schemas
File: __init__.py

Purpose: Export the error taxonomy shared by every allowtree module.
Export models for collaborators live in allowtree.schemas.tree.
"""

from .errors import (
    AllowTreeError,
    AllowTreeException,
    ConfigException,
    ErrorCodes,
    HexDecodingException,
    InvalidInputException,
    LeafIndexException,
    LeafNotFoundException,
    RootMismatchException,
)

__all__ = [
    "AllowTreeError",
    "AllowTreeException",
    "ConfigException",
    "ErrorCodes",
    "HexDecodingException",
    "InvalidInputException",
    "LeafIndexException",
    "LeafNotFoundException",
    "RootMismatchException",
]
