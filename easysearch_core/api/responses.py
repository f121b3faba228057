"""Success envelope shared by all API endpoints."""

from typing import Any

from flask import jsonify
from pydantic import BaseModel

from ..auth.schemas import ApiResponse


def send_response(message: str, data: Any = None, status_code: int = 200):
    """Build a Flask (response, status) tuple wrapped in the API envelope.

    Pydantic models in data are dumped with their camelCase aliases.
    """
    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json", by_alias=True)

    body = ApiResponse(status_code=status_code, message=message, data=data)
    return jsonify(body.model_dump(mode="json", by_alias=True)), status_code
