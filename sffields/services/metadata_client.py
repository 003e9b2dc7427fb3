"""Minimal Metadata API (SOAP) client for createMetadata / updateMetadata."""
import logging
from typing import Any, Dict, List, Optional, Union

from lxml import etree

from sffields.config import (
    METADATA_NAMESPACE,
    METADATA_SOAP_PATH,
    SOAP_ENV_NAMESPACE,
    XSI_NAMESPACE,
    get_settings,
)
from sffields.exceptions import MetadataRequestError

logger = logging.getLogger(__name__)

PNS = METADATA_NAMESPACE


def _q(tag: str) -> str:
    return etree.QName(PNS, tag).text


# =============================================================================
# INTERNAL HELPERS – ENVELOPE / RESPONSE
# =============================================================================

def _append_children(parent, data: Dict[str, Any]) -> None:
    """Write a metadata dict as child elements; lists repeat the element."""
    for key, value in data.items():
        for v in value if isinstance(value, list) else [value]:
            if v is None:
                continue
            child = etree.SubElement(parent, _q(key))
            if isinstance(v, dict):
                _append_children(child, v)
            elif isinstance(v, bool):
                child.text = "true" if v else "false"
            else:
                child.text = str(v)


def build_envelope(session_id: str, operation: str, metadata_type: str, items: List[Dict[str, Any]]) -> bytes:
    """Return the SOAP request for a CRUD-style Metadata API call."""
    root = etree.Element(
        etree.QName(SOAP_ENV_NAMESPACE, "Envelope"),
        nsmap={"soapenv": SOAP_ENV_NAMESPACE, "xsi": XSI_NAMESPACE, None: PNS},
    )
    header = etree.SubElement(root, etree.QName(SOAP_ENV_NAMESPACE, "Header"))
    session_header = etree.SubElement(header, _q("SessionHeader"))
    etree.SubElement(session_header, _q("sessionId")).text = session_id

    body = etree.SubElement(root, etree.QName(SOAP_ENV_NAMESPACE, "Body"))
    op = etree.SubElement(body, _q(operation))
    for item in items:
        metadata = etree.SubElement(op, _q("metadata"))
        metadata.set(etree.QName(XSI_NAMESPACE, "type").text, metadata_type)
        _append_children(metadata, item)

    return etree.tostring(root, encoding="UTF-8", xml_declaration=True)


def parse_save_response(content: bytes) -> List[Dict[str, Any]]:
    """Turn a createMetadata/updateMetadata response into save result dicts."""
    try:
        root = etree.fromstring(content)
    except etree.XMLSyntaxError as e:
        raise MetadataRequestError(f"Unreadable Metadata API response: {e}") from e

    fault = root.find(f".//{{{SOAP_ENV_NAMESPACE}}}Fault")
    if fault is not None:
        raise MetadataRequestError(fault.findtext("faultstring") or "Metadata API fault")

    results = []
    for node in root.iter(_q("result")):
        errors = [
            {
                "message": err.findtext(_q("message")),
                "statusCode": err.findtext(_q("statusCode")),
                "fields": [f.text for f in err.findall(_q("fields"))],
            }
            for err in node.findall(_q("errors"))
        ]
        results.append({
            "fullName": node.findtext(_q("fullName")),
            "success": (node.findtext(_q("success")) or "").strip().lower() == "true",
            "errors": errors,
        })
    return results


# =============================================================================
# CLIENT
# =============================================================================

class MetadataClient:
    """Metadata API calls over an authenticated simple_salesforce connection."""

    def __init__(self, sf_connection, timeout: Optional[int] = None):
        self.sf = sf_connection
        self.timeout = timeout or get_settings().metadata_http_timeout

    @property
    def metadata_url(self) -> str:
        return f"https://{self.sf.sf_instance}" + METADATA_SOAP_PATH.format(version=self.sf.sf_version)

    def create(self, metadata_type: str, items: Union[Dict[str, Any], List[Dict[str, Any]]]) -> List[Dict[str, Any]]:
        return self._save("createMetadata", metadata_type, items)

    def update(self, metadata_type: str, items: Union[Dict[str, Any], List[Dict[str, Any]]]) -> List[Dict[str, Any]]:
        return self._save("updateMetadata", metadata_type, items)

    def _save(self, operation: str, metadata_type: str, items) -> List[Dict[str, Any]]:
        items = items if isinstance(items, list) else [items]
        envelope = build_envelope(self.sf.session_id, operation, metadata_type, items)
        headers = {
            "Content-Type": "text/xml; charset=UTF-8",
            "SOAPAction": operation,
        }
        logger.debug("%s %s (%d item(s))", operation, metadata_type, len(items))

        resp = self.sf.session.post(self.metadata_url, data=envelope, headers=headers, timeout=self.timeout)
        # Faults come back as HTTP 500 with a SOAP body worth reading
        if resp.status_code >= 400 and b"Fault" not in resp.content:
            resp.raise_for_status()
        return parse_save_response(resp.content)
