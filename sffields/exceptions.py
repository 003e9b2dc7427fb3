"""Custom exceptions for the application."""


class SalesforceAPIError(Exception):
    """Base exception for Salesforce API errors."""
    pass


class OrgResolutionError(SalesforceAPIError):
    """Raised when a username or alias cannot be resolved to an org session."""
    pass


class MetadataRequestError(SalesforceAPIError):
    """Raised when a Metadata API call faults or returns an unreadable response."""
    pass
