# clientauth/domain/__init__.py

"""
Main module for the application's domain components.

This module exports the domain exceptions.
"""

from clientauth.domain.exceptions import (
    DomainException,               # Pure domain base exception
    InvalidRequestException,
    InvalidException,
    ResourceNotFoundException,
    ResourceAlreadyExistsException,
    StorageFaultException,
)

__all__ = [
    "DomainException",
    "InvalidRequestException",
    "InvalidException",
    "ResourceNotFoundException",
    "ResourceAlreadyExistsException",
    "StorageFaultException",
]
