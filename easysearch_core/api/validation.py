"""Request body validation decorator.

@validate_request parses the JSON body (or form data) into the Pydantic
model named by the view's type annotation and passes it in as an argument.
Path parameters from the URL rule are passed through unchanged.

    @auth_bp.post("/register")
    @validate_request
    def register(data: RegistrationRequest):
        ...
"""

import inspect
from functools import wraps

from flask import request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ValidationError


def _format_errors(exc: PydanticValidationError) -> list[dict]:
    """Flatten Pydantic errors into field / message / expected_type dicts."""
    return [
        {
            "field": ".".join(str(part) for part in err["loc"]),
            "message": err["msg"],
            "expected_type": err["type"],
        }
        for err in exc.errors(include_url=False)
    ]


SECRET_KEYS = ("password", "token")


def _redact(body: dict) -> dict:
    """Mask secret values before echoing a body back in error details."""
    return {
        key: "***" if any(s in key.lower() for s in SECRET_KEYS) else value
        for key, value in body.items()
    }


def _request_body() -> dict:
    body = request.get_json(silent=True)
    if body is None and request.form:
        body = request.form.to_dict()
    return body if body is not None else {}


def validate_request(f):
    """
    Validate the request body against the view's Pydantic annotation.

    Raises:
        TypeError: At decoration time if the view has no parameters or its
            first parameter lacks an annotation; at request time if a body
            parameter is not annotated with a BaseModel subclass
        ValidationError: If the body does not match the model. Details hold
            the model name, the received body and per-field errors.
    """
    signature = inspect.signature(f)
    params = list(signature.parameters.values())

    if not params:
        raise TypeError(f"{f.__name__} has no parameters to validate")
    if params[0].annotation is inspect.Parameter.empty:
        raise TypeError(f"{f.__name__}: parameter '{params[0].name}' lacks a type annotation")

    @wraps(f)
    def wrapper(*args, **kwargs):
        view_args = request.view_args or {}

        for param in params:
            if param.name in view_args or param.name in kwargs:
                continue

            model = param.annotation
            if not (inspect.isclass(model) and issubclass(model, BaseModel)):
                raise TypeError(
                    f"{f.__name__}: body parameter '{param.name}' must be annotated "
                    f"with a Pydantic BaseModel subclass, got {model!r}"
                )

            body = _request_body()
            if not isinstance(body, dict):
                raise ValidationError(
                    "Request body must be a JSON object",
                    {"model": model.__name__, "received": body}
                )
            try:
                kwargs[param.name] = model.model_validate(body)
            except PydanticValidationError as e:
                raise ValidationError(
                    "Invalid request data",
                    {
                        "model": model.__name__,
                        "received": _redact(body),
                        "errors": _format_errors(e),
                    }
                ) from e

        return f(*args, **kwargs)

    return wrapper
