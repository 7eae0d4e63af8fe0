from typing import Any, Mapping, Optional, Sequence


class ServiceValidationError(Exception):
    """Raised when input data is invalid or a precondition for a service call is not met.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context (field errors, validation info)
        code: optional machine-readable error code
        http_status: suggested HTTP status code for handlers (400)
    """

    http_status = 400

    def __init__(self, message: str = "Invalid input", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message}
        if self.code:
            payload["code"] = self.code
        if self.details:
            payload["details"] = self.details
        return payload

    def __str__(self) -> str:
        return self.message


class MealPlanSyntaxError(ServiceValidationError):
    """Raised when the embedded document cannot be parsed at all.

    Covers unbalanced braces or tags and object literals the JSON decoder
    rejects. No partial result accompanies it. http_status is 422.
    """

    http_status = 422

    def __init__(self, message: str = "Meal plan could not be parsed", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = "SYNTAX_FAILURE"):
        super().__init__(message, details=details, code=code)


class MealPlanStructureError(ServiceValidationError):
    """Raised when a parsed document violates one or more structural constraints.

    Attributes:
        issues: every violation found, in document order
    """

    http_status = 422

    def __init__(self, issues: Sequence[Any], message: Optional[str] = None, code: Optional[str] = "STRUCTURAL_VIOLATION"):
        self.issues = list(issues)
        if message is None:
            joined = "; ".join(f"{i.field}: {i.message}" for i in self.issues)
            message = f"Meal plan structure is invalid. {joined}"
        details = {"errors": [{"field": i.field, "message": i.message} for i in self.issues]}
        super().__init__(message, details=details, code=code)


class NotFoundError(Exception):
    """Raised when a requested resource was not found.

    Attributes are similar to ServiceValidationError. http_status is 404.
    """

    http_status = 404

    def __init__(self, message: str = "Not found", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message}
        if self.code:
            payload["code"] = self.code
        if self.details:
            payload["details"] = self.details
        return payload

    def __str__(self) -> str:
        return self.message
