from dataclasses import dataclass, field
from typing import Any, List, Optional

from payroll_api.validators.result import ValidationResult

VALIDATION_FAILED = "Validation failed"


@dataclass
class ServiceResult:
    success: bool
    data: Any = None
    message: str = ""
    errors: List[str] = field(default_factory=list)
    not_found: bool = False

    @classmethod
    def ok(cls, data: Any = None, message: str = "Operation completed successfully") -> "ServiceResult":
        return cls(success=True, data=data, message=message)

    @classmethod
    def fail(cls, message: str, errors: Optional[List[str]] = None, not_found: bool = False) -> "ServiceResult":
        return cls(success=False, message=message, errors=list(errors or []), not_found=not_found)

    @classmethod
    def missing(cls, entity: str) -> "ServiceResult":
        return cls.fail(f"{entity} not found", [f"{entity} not found"], not_found=True)

    @classmethod
    def invalid(cls, validation: ValidationResult) -> "ServiceResult":
        return cls.fail(VALIDATION_FAILED, validation.errors, not_found=validation.not_found)
