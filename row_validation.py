import re
from dataclasses import dataclass

from cell_coercion import EMAIL, NUMBER, cell_text, parse_number

EMAIL_PATTERN = re.compile(r"^[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}$", re.IGNORECASE)


@dataclass(frozen=True)
class ValidationIssue:
    column_id: str
    code: str
    message: str


def validate_row_fields(columns, fields: dict) -> list[ValidationIssue]:
    """Check new-row input the way the add-row form does before inserting."""
    issues = []
    for col in columns:
        text = cell_text(fields.get(col.id)).strip()
        if not text:
            if col.required:
                issues.append(
                    ValidationIssue(col.id, "required", f"{col.label} is required")
                )
            continue

        if col.type == EMAIL and not EMAIL_PATTERN.match(text):
            issues.append(ValidationIssue(col.id, "email", "Invalid email address"))
        elif col.type == NUMBER:
            try:
                number = parse_number(fields.get(col.id))
            except (TypeError, ValueError):
                issues.append(
                    ValidationIssue(col.id, "number", f"{col.label} must be a number")
                )
                continue
            if number < 0:
                issues.append(
                    ValidationIssue(col.id, "negative", "Value must be positive")
                )
    return issues
