"""Unified exception hierarchy for pagemerge.

All library exceptions inherit from PageMergeException, enabling unified
error handling across modules.

Categories:
- BusinessException: Invalid requests and validation errors
- ConfigurationException: Invalid merge configuration

Failures raised by page sources are never wrapped; they reach the caller
exactly as the source raised them.
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class PageMergeException(Exception):
    """Base exception for all pagemerge errors.

    Carries an optional error code and context dict for structured error data.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "PAGE_SIZE").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Business Exceptions
# =============================================================================


class BusinessException(PageMergeException):
    """Domain rule violations and request errors."""


class ValidationException(BusinessException):
    """Input validation failures."""


class InvalidPageRequestException(ValidationException):
    """A page request has a non-positive size, a negative page or a negative skip."""


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationException(PageMergeException):
    """Merge configuration is invalid (unknown direction or partition name)."""
