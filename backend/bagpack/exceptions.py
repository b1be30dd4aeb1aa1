"""
BagPack Backend: Custom Exception Hierarchy
============================================

What:  Application-specific exceptions for the error scenarios of the API.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return responses with the matching HTTP status code.
Who:   Raised by services; caught by global handlers.

Exception Hierarchy:
    BagPackError (base)
    ├── NotFoundError           → 404 Not Found (empty body)
    ├── CapacityExceededError   → 422 Unprocessable Entity
    └── DatabaseError           → 500 Internal Server Error

Services raise instead of returning status codes, so the route handlers stay
free of error branches and every endpoint reports failures the same way.
"""

from typing import Any, Dict, Optional


class BagPackError(Exception):
    """
    Base exception for all BagPack application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only where noted)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class NotFoundError(BagPackError):
    """
    Raised when a referenced bag or cuboid does not exist.

    HTTP:  404 Not Found, empty body.

    SQLAlchemy returns None for missing rows; the service layer converts that
    None into this exception so the route never inspects the result.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id is not None:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class CapacityExceededError(BagPackError):
    """
    Raised when placing a cuboid would push a bag's payload over its volume.

    HTTP:  422 Unprocessable Entity

    Example response:
        {
            "error": "insufficient_capacity",
            "message": "Insufficient capacity in bag",
            "details": {"bag_id": 1, "capacity": 8.0, "payload": 10.0},
            "request_id": "a1b2c3d4"
        }
    """

    def __init__(
        self,
        bag_id: Optional[int] = None,
        capacity: Optional[float] = None,
        payload: Optional[float] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if bag_id is not None:
            ctx["bag_id"] = bag_id
        if capacity is not None:
            ctx["capacity"] = capacity
        if payload is not None:
            ctx["payload"] = payload
        super().__init__(message="Insufficient capacity in bag", context=ctx)
        self.bag_id = bag_id
        self.capacity = capacity
        self.payload = payload


class DatabaseError(BagPackError):
    """
    Raised when database operations fail unexpectedly.

    HTTP:  500 Internal Server Error

    The message returned to the client is always generic. The context (query
    target, original exception type) is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
