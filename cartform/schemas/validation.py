from pydantic import BaseModel, Field


class FieldError(BaseModel):
    """Individual validation error"""
    code: str  # required, type, range, choice, csrf, extra_fields
    message: str


class ValidationResult(BaseModel):
    """Outcome of validating one submission"""
    errors: dict[str, list[FieldError]] = Field(default_factory=dict)
    form_errors: list[FieldError] = Field(default_factory=list)  # not tied to a single field

    @property
    def is_valid(self) -> bool:
        return not self.errors and not self.form_errors

    def add(self, field: str, code: str, message: str) -> None:
        self.errors.setdefault(field, []).append(FieldError(code=code, message=message))

    def add_form_error(self, code: str, message: str) -> None:
        self.form_errors.append(FieldError(code=code, message=message))

    def messages(self) -> dict[str, list[str]]:
        return {field: [e.message for e in errs] for field, errs in self.errors.items()}


class ValidationPreviewError(BaseModel):
    field: str | None  # None for form-level errors
    code: str
    message: str


class ValidationPreviewResponse(BaseModel):
    """Response from validation preview endpoint"""
    valid: bool
    values: dict[str, int | str | None]
    errors: list[ValidationPreviewError]
    warnings: list[str]  # Non-blocking warnings
