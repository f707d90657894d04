"""
app/validators package marker.
"""

from app.validators.business_form_validator import BusinessFormError, BusinessFormValidator
from app.validators.business_row_validator import BusinessRowError, BusinessRowValidator, FieldError

__all__ = [
    "BusinessFormError",
    "BusinessFormValidator",
    "BusinessRowError",
    "BusinessRowValidator",
    "FieldError",
]
