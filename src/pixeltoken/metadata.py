"""
Token metadata documents.

The SVG is embedded as a base64 data URI and the JSON document around it is
itself wrapped as a data URI, so one string carries everything.
"""
import base64
import json
from typing import Dict

DEFAULT_PREFIX = "Pixel Token"
DEFAULT_DESCRIPTION = "Programmatically generated Pixel Token"

SVG_MIME = "image/svg+xml"
JSON_MIME = "application/json"


def data_uri(mime: str, payload: bytes) -> str:
    return f"data:{mime};base64,{base64.b64encode(payload).decode('ascii')}"


def parse_data_uri(uri: str) -> bytes:
    """Return the payload of a base64 data URI."""
    head, sep, body = uri.partition(",")
    if not sep or not head.startswith("data:") or not head.endswith(";base64"):
        raise ValueError(f"not a base64 data URI: {uri[:40]!r}")
    return base64.b64decode(body, validate=True)


def build_document(token_id: int, svg: str, prefix: str = DEFAULT_PREFIX,
                   description: str = DEFAULT_DESCRIPTION) -> Dict[str, str]:
    return {
        "name": f"{prefix} #{token_id}",
        "description": description,
        "image": data_uri(SVG_MIME, svg.encode("utf-8")),
    }


def assemble(token_id: int, svg: str, prefix: str = DEFAULT_PREFIX,
             description: str = DEFAULT_DESCRIPTION) -> str:
    doc = build_document(token_id, svg, prefix, description)
    text = json.dumps(doc, ensure_ascii=False, separators=(",", ":"))
    return data_uri(JSON_MIME, text.encode("utf-8"))


def read_document(uri: str) -> Dict[str, str]:
    """Decode an assembled token URI back into its JSON document."""
    return json.loads(parse_data_uri(uri).decode("utf-8"))


def read_image(uri: str) -> str:
    """Decode an assembled token URI down to the SVG text."""
    return parse_data_uri(read_document(uri)["image"]).decode("utf-8")
