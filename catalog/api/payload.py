"""
Request body parsing.

Mutating routes accept a JSON body or multipart form data. In multipart the
``data`` field carries a JSON document (a RawField) that is parsed here into
a ParsedPayload and merged over the plain form fields; the ``image`` field
carries the file. Nothing downstream inspects raw request shapes.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Union

from fastapi import Request
from starlette.datastructures import UploadFile

from catalog.core.errors import BadRequest
from catalog.services.image_service import UploadedImage, check_image

FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


@dataclass(frozen=True)
class RawField:
    text: str


@dataclass(frozen=True)
class ParsedPayload:
    data: dict[str, Any]


Payload = Union[RawField, ParsedPayload]


@dataclass
class RequestPayload:
    data: dict[str, Any] = field(default_factory=dict)
    image: UploadedImage | None = None


def parse_payload(body: Payload, *, source: str = "'data' field") -> ParsedPayload:
    if isinstance(body, ParsedPayload):
        return body

    try:
        data = json.loads(body.text) if body.text.strip() else {}
    except json.JSONDecodeError:
        raise BadRequest(f"Invalid JSON in {source}")

    if not isinstance(data, dict):
        raise BadRequest(f"Invalid JSON in {source}")
    return ParsedPayload(data=data)


async def read_payload(request: Request) -> RequestPayload:
    """FastAPI dependency: typed payload plus the optional image file."""
    content_type = request.headers.get("content-type", "")

    if not content_type.startswith(FORM_CONTENT_TYPES):
        raw = await request.body()
        parsed = parse_payload(RawField(raw.decode("utf-8", "replace")), source="request body")
        return RequestPayload(data=dict(parsed.data))

    form = await request.form()
    fields: dict[str, Any] = {}
    embedded: ParsedPayload | None = None
    image: UploadedImage | None = None

    for key, value in form.multi_items():
        if isinstance(value, UploadFile):
            if key == "image":
                image = UploadedImage(
                    filename=value.filename or "",
                    content_type=value.content_type or "",
                    data=await value.read(),
                )
        elif key == "data":
            embedded = parse_payload(RawField(value))
        else:
            fields[key] = value

    if image is not None:
        check_image(image)

    if embedded is not None:
        fields.update(embedded.data)
    return RequestPayload(data=fields, image=image)
