from dataclasses import dataclass, field
from typing import List


@dataclass
class ValidationResult:
    is_valid: bool
    errors: List[str] = field(default_factory=list)
    not_found: bool = False

    @classmethod
    def success(cls) -> "ValidationResult":
        return cls(is_valid=True)

    @classmethod
    def failure(cls, *errors: str) -> "ValidationResult":
        return cls(is_valid=False, errors=list(errors))

    @classmethod
    def missing(cls, entity: str) -> "ValidationResult":
        return cls(is_valid=False, errors=[f"{entity} not found"], not_found=True)

    @classmethod
    def from_errors(cls, errors: List[str]) -> "ValidationResult":
        if errors:
            return cls(is_valid=False, errors=list(errors))
        return cls.success()
