from pydantic_core import PydanticCustomError


def require_text(value):
    """Reject missing, non-string and whitespace-only values as blank."""
    if value is None or not isinstance(value, str) or not value.strip():
        raise PydanticCustomError("blank", "can't be blank")
    return value.strip()
