# src/schemas/base_schemas.py
from pydantic import BaseModel, ConfigDict, ValidationError
from typing import Optional, Any, Dict, Type, TypeVar
from utils.exceptions import BadRequestException

SchemaType = TypeVar("SchemaType", bound=BaseModel)


class BaseSchema(BaseModel):
    """Base schema with common configuration"""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        str_strip_whitespace=True,
        use_enum_values=True,
    )


class ResponseBase(BaseSchema):
    """Base response schema"""

    success: bool = True
    message: Optional[str] = None


def blank_to_none(value: Any) -> Any:
    """Form posts send empty strings for untouched inputs"""
    if isinstance(value, str) and not value.strip():
        return None
    return value


def build_from_form(schema: Type[SchemaType], data: Dict[str, Any]) -> SchemaType:
    """Validate multipart form values, surfacing failures as a 400"""
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        errors = []
        for err in e.errors():
            field = ".".join(str(part) for part in err["loc"]) or "payload"
            errors.append(f"{field}: {err['msg']}")
        raise BadRequestException("; ".join(errors))
