from typing import Any

from pydantic import BaseModel


def dump(schema: type[BaseModel], obj: Any) -> dict[str, Any]:
    """ORM object -> camelCase JSON-ready dict."""
    return schema.model_validate(obj).model_dump(by_alias=True, mode="json")


def success(data: Any = None, message: str | None = None) -> dict[str, Any]:
    body: dict[str, Any] = {"success": True}
    if message is not None:
        body["message"] = message
    if data is not None:
        body["data"] = data
    return body
