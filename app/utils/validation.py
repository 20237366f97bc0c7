from typing import Dict, Type
from pydantic import BaseModel, ValidationError


# pydantic error types that carry a message meant for the shopper
_OWN_MESSAGES = {"blank", "inclusion", "format", "greater_than_or_equal", "less_than_or_equal"}


def collect_errors(schema: Type[BaseModel], data) -> Dict[str, str]:
    """Validate ``data`` against ``schema`` and return ``{field: message}``.

    Every failing field is reported, not only the first one. Missing values
    read as blank; values of the wrong type, NaN and infinities read as not a
    number.
    """
    try:
        schema.model_validate(data if isinstance(data, dict) else {})
    except ValidationError as ve:
        errors = {}
        for err in ve.errors():
            field = str(err["loc"][0]) if err["loc"] else "base"
            if field in errors:
                continue
            if err["type"] in _OWN_MESSAGES:
                errors[field] = err["msg"]
            elif err["type"] == "missing":
                errors[field] = "can't be blank"
            else:
                errors[field] = "is not a number"
        return errors
    return {}
