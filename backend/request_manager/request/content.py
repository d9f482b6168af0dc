"""Request content — the parsed, framework-independent view of one HTTP request.

The request manager never touches a Starlette request directly. A
RequestData snapshot is taken once per request and the body is parsed from it:
JSON documents are decoded, everything else falls back to query parameters
(read-only methods) or form parameters.
"""

import json
import re
from typing import Any, Iterable, Optional

import structlog
from pydantic import BaseModel, Field
from fastapi import Request

from request_manager.config import Settings, get_settings
from request_manager.exceptions import SmartProblemException
from request_manager.models.problem import ProblemType, SmartProblem

logger = structlog.get_logger()

_KEY_SEGMENTS = re.compile(r"^([^\[\]]+)((?:\[[^\[\]]*\])*)$")

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def expand_brackets(items: Iterable[tuple[str, Any]]) -> dict[str, Any]:
    """Expand bracket-notation keys into nested structures.

    ``filters[status]=open`` becomes ``{"filters": {"status": "open"}}`` and
    ``tags[]=a&tags[]=b`` becomes ``{"tags": ["a", "b"]}``. Keys without
    brackets are kept as-is; a repeated plain key keeps its last value.
    """
    result: dict[str, Any] = {}

    for raw_key, value in items:
        match = _KEY_SEGMENTS.match(raw_key)
        if not match or not match.group(2):
            result[raw_key] = value
            continue

        segments = [match.group(1)] + re.findall(r"\[([^\[\]]*)\]", match.group(2))
        node: Any = result
        for index, segment in enumerate(segments):
            is_last = index == len(segments) - 1
            next_is_append = not is_last and segments[index + 1] == ""

            if isinstance(node, list):
                # Only reached for "[]" segments
                if is_last:
                    node.append(value)
                else:
                    child: Any = [] if next_is_append else {}
                    node.append(child)
                    node = child
                continue

            if is_last:
                node[segment] = value
                continue

            child = node.get(segment)
            wanted = list if next_is_append else dict
            if not isinstance(child, wanted):
                child = wanted()
                node[segment] = child
            node = child

    return result


class RequestData(BaseModel):
    """Snapshot of the parts of an HTTP request the manager reads."""

    method: str = "GET"
    content_type: Optional[str] = None
    body: bytes = b""
    query: dict[str, Any] = Field(default_factory=dict)
    form: dict[str, Any] = Field(default_factory=dict)
    attributes: dict[str, Any] = Field(default_factory=dict)

    @property
    def media_type(self) -> str:
        """Content type without parameters, lowercased."""
        if not self.content_type:
            return ""
        return self.content_type.split(";", 1)[0].strip().lower()

    def get(self, key: str, default: Any = None) -> Any:
        """Look a parameter up in path attributes, then query, then form."""
        for bag in (self.attributes, self.query, self.form):
            if key in bag:
                return bag[key]
        return default

    @classmethod
    async def from_request(cls, request: Request) -> "RequestData":
        """Build a snapshot from a Starlette/FastAPI request."""
        content_type = request.headers.get("content-type")
        body = await request.body()

        form: dict[str, Any] = {}
        if content_type and content_type.split(";", 1)[0].strip().lower() in FORM_CONTENT_TYPES:
            form_data = await request.form()
            form = expand_brackets(form_data.multi_items())

        return cls(
            method=request.method.upper(),
            content_type=content_type,
            body=body,
            query=expand_brackets(request.query_params.multi_items()),
            form=form,
            attributes=dict(request.path_params),
        )


def is_json_content(data: RequestData, settings: Optional[Settings] = None) -> bool:
    settings = settings or get_settings()
    media_type = data.media_type
    return media_type in settings.JSON_CONTENT_TYPES or media_type.endswith("+json")


def parse_request_content(data: RequestData, settings: Optional[Settings] = None) -> dict[str, Any]:
    """Turn a request snapshot into the content tree the manager validates.

    Args:
        data: Request snapshot
        settings: Optional settings override (JSON content types, read-only methods)

    Returns:
        Mapping of field name to value

    Raises:
        SmartProblemException: invalid_body_format when a JSON body does not
            decode to an object
    """
    settings = settings or get_settings()

    if not is_json_content(data, settings):
        if data.method.upper() in settings.READ_ONLY_METHODS:
            return dict(data.query)
        return dict(data.form)

    try:
        content = json.loads(data.body) if data.body else None
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.info("invalid_body_format", error=str(e))
        content = None

    if not isinstance(content, dict):
        raise SmartProblemException(
            SmartProblem(status=400, type=ProblemType.INVALID_BODY_FORMAT, title="Invalid JSON format sent.")
        )

    return content
