"""
Request schemas - pydantic models for validating request bodies.
"""

from flask import request
from pydantic import BaseModel, ValidationError as PydanticValidationError

from ...services.errors import ValidationError


def parse_body(schema_cls, data=None) -> BaseModel:
    """
    Validates the JSON body (or form data) against schema_cls.

    Raises:
        ValidationError: naming the first offending field
    """
    if data is None:
        data = request.get_json(silent=True)
        if data is None:
            data = request.form.to_dict() if request.form else {}

    try:
        return schema_cls.model_validate(data)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = '.'.join(str(part) for part in first.get('loc', ())) or None
        if first.get('type') == 'missing':
            message = f'{field} is required'
        else:
            message = f'{field}: {first.get("msg")}' if field else first.get('msg')
        raise ValidationError(message, field=field)
