from typing import Dict, List

from email_validator import EmailNotValidError, validate_email

from ..core.exceptions import ValidationError
from .models import UserPayload

USERNAME_MIN_LENGTH = 5


def username_errors(username: str) -> List[Dict[str, str]]:
    errors = []
    if len(username) < USERNAME_MIN_LENGTH:
        errors.append({"field": "Username", "message": "Username is required"})
    if not (username.isascii() and username.isalnum()):
        errors.append({
            "field": "Username",
            "message": "Username contains non alphanumeric characters - not allowed.",
        })
    return errors


def payload_errors(payload: UserPayload) -> List[Dict[str, str]]:
    """Collect every violation in a registration/update body"""
    errors = username_errors(payload.username)
    if not payload.password:
        errors.append({"field": "Password", "message": "Password is required"})
    try:
        validate_email(payload.email, check_deliverability=False)
    except EmailNotValidError:
        errors.append({"field": "Email", "message": "Email does not appear to be valid"})
    return errors


def ensure_valid_payload(payload: UserPayload) -> None:
    errors = payload_errors(payload)
    if errors:
        raise ValidationError(errors=errors)


def ensure_valid_favorite_params(username: str, movie_id: str) -> None:
    errors = username_errors(username)
    if not movie_id.strip():
        errors.append({"field": "MovieID", "message": "MovieID is required"})
    if errors:
        raise ValidationError(errors=errors)
