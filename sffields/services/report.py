"""Human-readable summary of a custom field run."""
from dataclasses import dataclass
from typing import List


@dataclass
class ToolResponse:
    text: str
    is_error: bool = False


def build_result_summary(
    success_fields: List[str],
    failed_fields: List[str],
    permission_results: str,
) -> str:
    parts: List[str] = []

    if success_fields:
        parts.append(f"Successfully created {len(success_fields)} field(s):")
        parts.append("\n".join(f"  ✓ {f}" for f in success_fields))

    if failed_fields:
        parts.append(f"\nFailed to create {len(failed_fields)} field(s):")
        parts.append("\n".join(f"  ✗ {f}" for f in failed_fields))

    if permission_results:
        parts.append("\nPermission assignments:")
        parts.append(permission_results)

    return "\n".join(parts)


def summarize(success_fields: List[str], failed_fields: List[str], permission_results: str) -> ToolResponse:
    """Only field creation failures mark the response as an error."""
    return ToolResponse(
        build_result_summary(success_fields, failed_fields, permission_results),
        is_error=len(failed_fields) > 0,
    )
