"""Configuration settings for the sffields MCP server."""
import os
from functools import lru_cache

# Salesforce Metadata API constants
METADATA_NAMESPACE = "http://soap.sforce.com/2006/04/metadata"
SOAP_ENV_NAMESPACE = "http://schemas.xmlsoap.org/soap/envelope/"
XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"
METADATA_SOAP_PATH = "/services/Soap/m/{version}"

CUSTOM_FIELD_SUFFIX = "__c"
CUSTOM_FIELD_METADATA_TYPE = "CustomField"


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        self.server_name: str = os.getenv("SFFIELDS_SERVER_NAME", "salesforce-custom-fields-server")
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO")

        # Salesforce CLI used to resolve org aliases/usernames
        self.sf_cli_path: str = os.getenv("SF_CLI_PATH", "sf")
        self.sf_cli_timeout: int = int(os.getenv("SF_CLI_TIMEOUT", "60"))

        # Used when the CLI does not report an API version for the org
        self.api_version: str = os.getenv("SF_API_VERSION", "59.0")
        self.metadata_http_timeout: int = int(os.getenv("METADATA_HTTP_TIMEOUT", "120"))


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
