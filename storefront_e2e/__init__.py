"""Support package for the storefront end-to-end suite."""

from .accessibility import AccessibilityReport, Violation, assert_no_violations, scan_page
from .data_factory import (
    Credentials,
    RegistrationRecord,
    TestDataFactory,
    factory_from_settings,
    validation_errors,
)
from .errors import (
    AccessibilityViolationError,
    ConfigurationError,
    LocatorNotFoundError,
    NavigationError,
    StorefrontE2EError,
)

__all__ = [
    "AccessibilityReport",
    "AccessibilityViolationError",
    "ConfigurationError",
    "Credentials",
    "LocatorNotFoundError",
    "NavigationError",
    "RegistrationRecord",
    "StorefrontE2EError",
    "TestDataFactory",
    "Violation",
    "assert_no_violations",
    "factory_from_settings",
    "scan_page",
    "validation_errors",
]
