from typing import Dict, List

ValidationFailureMap = Dict[str, List[str]]

VALIDATION_PROBLEM_TYPE = "https://tools.ietf.org/html/rfc9110#section-15.5.21"
VALIDATION_PROBLEM_TITLE = "One or more validation errors occurred."


class MissingRequiredFieldError(ValueError):
    """Mandatory request fields were bound as null/absent (a client input defect)."""

    def __init__(self, failures: ValidationFailureMap):
        self.failures = failures
        super().__init__(f"Missing required fields: {', '.join(failures)}")


def validation_problem(failures: ValidationFailureMap, status: int = 422) -> dict:
    return {
        "type": VALIDATION_PROBLEM_TYPE,
        "title": VALIDATION_PROBLEM_TITLE,
        "status": status,
        "errors": failures,
    }
