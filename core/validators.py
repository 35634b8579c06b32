"""
Core Validators

Shared validation functions for all modules.
"""

from typing import Optional

from .exceptions import ValidationError


def validate_page_count(
    page_count: int,
    max_pages: int,
    module_name: str = "Module"
) -> None:
    """
    Validate that page count doesn't exceed maximum.

    Args:
        page_count: Number of pages in document
        max_pages: Maximum allowed pages (0 disables the check)
        module_name: Name of the module for error messages

    Raises:
        ValueError: If pages exceed the maximum
    """
    if max_pages and page_count > max_pages:
        raise ValueError(
            f"{module_name}: Document has {page_count} pages, "
            f"exceeds maximum of {max_pages} pages."
        )


def validate_file_size(
    size_bytes: int,
    max_size_mb: int,
    module_name: str = "Module"
) -> None:
    """
    Validate that an upload doesn't exceed the size limit.

    Raises:
        ValueError: If size exceeds the maximum
    """
    if max_size_mb and size_bytes > max_size_mb * 1024 * 1024:
        raise ValueError(
            f"{module_name}: File is {size_bytes / (1024 * 1024):.1f} MB, "
            f"exceeds maximum of {max_size_mb} MB."
        )


def validate_required_field(
    value: Optional[str],
    field_name: str,
    message: Optional[str] = None
) -> str:
    """
    Validate that a required field is not empty.

    Args:
        value: Value to validate
        field_name: Name of the field for error messages
        message: Message to raise instead of the generated one

    Returns:
        The value, unchanged

    Raises:
        ValidationError: If value is None or empty
    """
    if not value or not value.strip():
        raise ValidationError(message or f"{field_name} is required and cannot be empty.")
    return value
