"""Salesforce connection management via the Salesforce CLI's stored org auth"""
import json
import logging
import subprocess
from pathlib import Path
from typing import Any, Dict

from simple_salesforce import Salesforce

from sffields.config import get_settings
from sffields.exceptions import OrgResolutionError
from sffields.services.metadata_client import MetadataClient

logger = logging.getLogger(__name__)


def _display_org(username_or_alias: str, directory: str) -> Dict[str, Any]:
    """Run ``sf org display`` inside ``directory`` and return its ``result`` block.

    The working directory matters: project-local aliases and target-org
    config are read relative to it.
    """
    settings = get_settings()
    cwd = Path(directory)
    if not cwd.is_dir():
        raise OrgResolutionError(f"Directory not found: {directory}")

    command = [settings.sf_cli_path, "org", "display", "--target-org", username_or_alias, "--json"]
    try:
        proc = subprocess.run(
            command,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            cwd=cwd,
            timeout=settings.sf_cli_timeout,
            check=False,
        )
    except FileNotFoundError as e:
        raise OrgResolutionError(f"Salesforce CLI not found ({settings.sf_cli_path})") from e
    except subprocess.TimeoutExpired as e:
        raise OrgResolutionError(f"Timed out resolving org '{username_or_alias}'") from e

    try:
        payload = json.loads(proc.stdout or "{}")
    except json.JSONDecodeError as e:
        raise OrgResolutionError(f"Unable to parse Salesforce CLI output: {e}") from e

    if proc.returncode != 0 or payload.get("status", 0) != 0:
        message = payload.get("message") or (proc.stderr or "").strip() or "unknown error"
        raise OrgResolutionError(f"No authorized org found for '{username_or_alias}': {message}")

    result = payload.get("result") or {}
    if not result.get("accessToken") or not result.get("instanceUrl"):
        raise OrgResolutionError(f"Org '{username_or_alias}' has no active session. Please login again.")
    return result


def get_salesforce_connection(username_or_alias: str, directory: str) -> Salesforce:
    """
    Get a Salesforce connection for a CLI-authorized org.

    Args:
        username_or_alias: Username or alias known to the Salesforce CLI
        directory: Project directory the CLI resolves aliases from

    Returns:
        Salesforce connection instance
    """
    logger.info("🔗 Resolving Salesforce org '%s'...", username_or_alias)
    org = _display_org(username_or_alias, directory)

    sf = Salesforce(
        instance_url=org["instanceUrl"],
        session_id=org["accessToken"],
        version=org.get("apiVersion") or get_settings().api_version,
    )
    logger.info("✅ Connected to %s as %s", org["instanceUrl"], org.get("username", username_or_alias))
    return sf


def get_metadata_connection(username_or_alias: str, directory: str) -> MetadataClient:
    """Metadata API client for the resolved org."""
    return MetadataClient(get_salesforce_connection(username_or_alias, directory))
