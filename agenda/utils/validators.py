from datetime import datetime
from typing import Any, Iterable, List, Mapping, Optional, Tuple

DATE_FORMAT = '%Y-%m-%d'

class FormValidator:
    """Collects the issues found in a submitted form"""

    def __init__(self, data: Optional[Mapping[str, Any]] = None):
        self.data = data or {}
        self.issues: List[str] = []

    def require(self, *fields: str) -> 'FormValidator':
        """Every field must be present and not blank."""
        for field in fields:
            value = self.data.get(field)
            if value is None or (isinstance(value, str) and not value.strip()):
                self.issues.append(f"{field} is required")
        return self

    def check_percentage(self, *fields: str) -> 'FormValidator':
        """Optional integer fields that must stay within 0-100."""
        for field in fields:
            value = self.data.get(field)
            if value is None or value == '':
                continue
            try:
                number = int(value)
            except (TypeError, ValueError):
                self.issues.append(f"{field} must be a whole number")
                continue
            if not 0 <= number <= 100:
                self.issues.append(f"{field} must be between 0 and 100")
        return self

    def check_non_negative(self, *fields: str) -> 'FormValidator':
        for field in fields:
            value = self.data.get(field)
            if value is None or value == '':
                continue
            try:
                number = int(value)
            except (TypeError, ValueError):
                self.issues.append(f"{field} must be a whole number")
                continue
            if number < 0:
                self.issues.append(f"{field} cannot be negative")
        return self

    def check_age_range(self, min_field: str = 'min_age', max_field: str = 'max_age') -> 'FormValidator':
        try:
            min_age = int(self.data.get(min_field))
            max_age = int(self.data.get(max_field))
        except (TypeError, ValueError):
            return self
        if min_age > max_age:
            self.issues.append(f"{min_field} cannot be greater than {max_field}")
        return self

    def check_date(self, *fields: str) -> 'FormValidator':
        for field in fields:
            value = self.data.get(field)
            if value in (None, ''):
                continue
            if parse_date(value) is None:
                self.issues.append(f"{field} must be a date in YYYY-MM-DD format")
        return self

    def check_datetime(self, *fields: str) -> 'FormValidator':
        for field in fields:
            value = self.data.get(field)
            if value in (None, ''):
                continue
            if parse_datetime(value) is None:
                self.issues.append(f"{field} must be an ISO date and time")
        return self

    def check_choice(self, field: str, choices: Iterable[str]) -> 'FormValidator':
        value = self.data.get(field)
        choices = list(choices)
        if value not in (None, '') and value not in choices:
            self.issues.append(f"{field} must be one of: {', '.join(choices)}")
        return self

    def validate(self) -> Tuple[bool, List[str]]:
        """Return (is_valid, issues)."""
        return len(self.issues) == 0, self.issues

def parse_date(value):
    """Parse 'YYYY-MM-DD' (or an ISO datetime) into a date, None when invalid."""
    if value in (None, ''):
        return None
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except (TypeError, ValueError):
        pass
    try:
        return datetime.fromisoformat(value).date()
    except (TypeError, ValueError):
        return None

def parse_datetime(value):
    if value in (None, ''):
        return None
    try:
        return datetime.fromisoformat(value)
    except (TypeError, ValueError):
        return None

def parse_bool(value):
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in ('1', 'true', 'yes', 'on')
