"""
Input Validation Utilities for BOQ requests

Usage:
    from utils.validators import validate_boq_job_request, ValidationError

    try:
        job_request = validate_boq_job_request(request.get_json(silent=True))
    except ValidationError as e:
        return jsonify({'success': False, 'error': e.message, 'details': e.details}), 400
"""

import uuid
from dataclasses import dataclass
from typing import Any, Dict, Optional

from config.constants import BOQStatus


class ValidationError(Exception):
    """Custom validation error with details"""

    def __init__(self, message: str, field: str = None, details: Dict = None):
        self.message = message
        self.field = field
        self.details = details or {}
        super().__init__(self.message)


@dataclass(frozen=True)
class BOQJobRequest:
    job_id: uuid.UUID
    quantity: float
    labor_cost: float


def validate_uuid(value: Any, field_name: str = "id") -> uuid.UUID:
    """
    Validate a UUID given as string or UUID

    Raises:
        ValidationError: If value is not a valid UUID
    """
    if isinstance(value, uuid.UUID):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required", field=field_name)
    try:
        return uuid.UUID(value.strip())
    except ValueError:
        raise ValidationError(f"{field_name} must be a valid UUID", field=field_name)


def validate_positive_number(value: Any, field_name: str = "value", allow_zero: bool = False) -> float:
    """
    Validate that a value is a positive number

    Args:
        value: Value to validate
        field_name: Name of the field for error messages
        allow_zero: If True, allows zero values

    Returns:
        Validated number as float

    Raises:
        ValidationError: If value is not a positive number
    """
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number", field=field_name)
    try:
        num = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number", field=field_name)

    if num != num or num in (float('inf'), float('-inf')):
        raise ValidationError(f"{field_name} must be a finite number", field=field_name)

    if allow_zero:
        if num < 0:
            raise ValidationError(f"{field_name} cannot be negative", field=field_name)
    else:
        if num <= 0:
            raise ValidationError(f"{field_name} must be a positive number", field=field_name)

    return num


def validate_boq_job_request(data: Optional[Dict]) -> BOQJobRequest:
    """
    Validate the body of an add-job-to-BOQ request

    Expected keys: job_id (UUID), quantity (> 0), labor_cost (>= 0)

    Raises:
        ValidationError: With per-field errors in details['errors']
    """
    if not data or not isinstance(data, dict):
        raise ValidationError("No data provided")

    validated = {}
    errors = []

    checks = (
        ('job_id', lambda v: validate_uuid(v, 'job_id')),
        ('quantity', lambda v: validate_positive_number(v, 'quantity')),
        ('labor_cost', lambda v: validate_positive_number(v, 'labor_cost', allow_zero=True)),
    )
    for field_name, check in checks:
        if data.get(field_name) is None:
            errors.append({'field': field_name, 'error': f'{field_name} is required'})
            continue
        try:
            validated[field_name] = check(data[field_name])
        except ValidationError as e:
            errors.append({'field': e.field, 'error': e.message})

    if errors:
        raise ValidationError(
            "Validation failed",
            details={'errors': errors}
        )

    return BOQJobRequest(**validated)


def validate_status_update(data: Optional[Dict]) -> BOQStatus:
    """Validate the body of a BOQ status change request"""
    if not isinstance(data, dict) or data.get('status') is None:
        raise ValidationError("status is required", field='status')
    try:
        return BOQStatus.parse(data['status'])
    except ValueError as e:
        raise ValidationError(str(e), field='status')


def validate_selling_general_cost(data: Optional[Dict]) -> float:
    """Validate the body of a selling general cost update"""
    if not isinstance(data, dict) or data.get('selling_general_cost') is None:
        raise ValidationError("selling_general_cost is required", field='selling_general_cost')
    return validate_positive_number(data['selling_general_cost'], 'selling_general_cost', allow_zero=True)
