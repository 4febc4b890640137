from __future__ import annotations

from typing import Dict, List, Mapping, Tuple, Type

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from eventhub.errors import ValidationError

# (field, pydantic error type) -> user facing message
Messages = Mapping[Tuple[str, str], str]


def _message(err: Dict, messages: Messages) -> Tuple[str, str]:
    loc = err["loc"]
    field = ".".join(str(p) for p in loc) or "__root__"
    # custom messages describe whole fields, not list items
    if len(loc) == 1:
        custom = messages.get((field, err["type"]))
        if custom:
            return field, custom
    if err["type"] == "value_error":
        return field, str(err["ctx"]["error"])
    return field, err["msg"]


def run_validation(model: Type[BaseModel], data: Mapping, messages: Messages, what: str) -> BaseModel:
    """
    Validate `data` against `model`, turning every pydantic error into one
    entry of a single eventhub ValidationError.
    """
    try:
        return model.model_validate(dict(data))
    except PydanticValidationError as e:
        errors: List[Dict[str, str]] = []
        seen = set()
        for err in e.errors():
            field, msg = _message(err, messages)
            if (field, msg) in seen:
                continue
            seen.add((field, msg))
            errors.append({"field": field, "message": msg})
        raise ValidationError(f"{what} validation failed", errors=errors) from e
