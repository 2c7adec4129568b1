"""Custom exceptions for CareerStudio."""

from enum import Enum


class ErrorCode(str, Enum):
    """Standardized error codes for CareerStudio."""

    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Section errors
    INVALID_KIND = "INVALID_KIND"
    DUPLICATE_ID = "DUPLICATE_ID"
    MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"
    SECTION_NOT_FOUND = "SECTION_NOT_FOUND"
    LAST_SECTION = "LAST_SECTION"

    # Theme errors
    UNKNOWN_PRESET = "UNKNOWN_PRESET"

    # Auth errors
    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"
    NOT_AUTHORIZED = "NOT_AUTHORIZED"
    EMAIL_ALREADY_REGISTERED = "EMAIL_ALREADY_REGISTERED"

    # Company errors
    COMPANY_NOT_FOUND = "COMPANY_NOT_FOUND"
    COMPANY_ALREADY_EXISTS = "COMPANY_ALREADY_EXISTS"
    VERSION_CONFLICT = "VERSION_CONFLICT"

    # Job errors
    JOB_NOT_FOUND = "JOB_NOT_FOUND"

    # Storage errors
    STORAGE_ERROR = "STORAGE_ERROR"
    STORAGE_UPLOAD_FAILED = "STORAGE_UPLOAD_FAILED"
    UPLOAD_VALIDATION_ERROR = "UPLOAD_VALIDATION_ERROR"
    UPLOAD_NOT_FOUND = "UPLOAD_NOT_FOUND"


class CareerStudioError(Exception):
    """Base exception for CareerStudio."""

    status_code = 400

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or ErrorCode.INTERNAL_ERROR.value
        super().__init__(self.message)


class SectionValidationError(CareerStudioError):
    """Raised when a section document fails validation."""

    status_code = 422

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message, code or ErrorCode.VALIDATION_ERROR.value)


class InvalidKindError(SectionValidationError):
    """Raised when a section kind is not one of the known kinds."""

    def __init__(self, kind: object):
        super().__init__(f"Invalid section type: {kind!r}", ErrorCode.INVALID_KIND.value)
        self.kind = kind


class DuplicateIdError(SectionValidationError):
    """Raised when a section id collides with another section of the company."""

    def __init__(self, section_id: str):
        super().__init__(f"Duplicate section id: {section_id}", ErrorCode.DUPLICATE_ID.value)
        self.section_id = section_id


class MissingRequiredFieldError(SectionValidationError):
    """Raised when a section is missing id, type or order."""

    def __init__(self, field: str):
        super().__init__(
            f"Missing required section field: {field}", ErrorCode.MISSING_REQUIRED_FIELD.value
        )
        self.field = field


class SectionNotFoundError(CareerStudioError):
    """Raised when a section id does not exist in the collection."""

    status_code = 404

    def __init__(self, section_id: str):
        super().__init__(f"Section not found: {section_id}", ErrorCode.SECTION_NOT_FOUND.value)


class LastSectionError(CareerStudioError):
    """Raised when removing the only remaining section."""

    status_code = 409

    def __init__(self, section_id: str):
        super().__init__(
            f"Cannot remove section {section_id}: a page must keep at least one section",
            ErrorCode.LAST_SECTION.value,
        )


class UnknownPresetError(CareerStudioError):
    """Raised when a style preset id is not known."""

    status_code = 404

    def __init__(self, preset_id: str):
        super().__init__(f"Unknown style preset: {preset_id}", ErrorCode.UNKNOWN_PRESET.value)


class AuthenticationError(CareerStudioError):
    """Raised when credentials or tokens are invalid."""

    status_code = 401

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message, ErrorCode.AUTHENTICATION_FAILED.value)


class NotAuthorizedError(CareerStudioError):
    """Raised when a recruiter acts on a company they do not own."""

    status_code = 403

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message, ErrorCode.NOT_AUTHORIZED.value)


class EmailAlreadyRegisteredError(CareerStudioError):
    """Raised when registering an email that already exists."""

    def __init__(self, email: str):
        super().__init__(
            f"Email already registered: {email}", ErrorCode.EMAIL_ALREADY_REGISTERED.value
        )


class CompanyNotFoundError(CareerStudioError):
    """Raised when company is not found."""

    status_code = 404

    def __init__(self, identifier: str):
        super().__init__(f"Company not found: {identifier}", ErrorCode.COMPANY_NOT_FOUND.value)


class CompanyAlreadyExistsError(CareerStudioError):
    """Raised when a recruiter already owns a company."""

    status_code = 409

    def __init__(self):
        super().__init__("Recruiter already has a company", ErrorCode.COMPANY_ALREADY_EXISTS.value)


class VersionConflictError(CareerStudioError):
    """Raised when an update carries a stale company version."""

    status_code = 409

    def __init__(self, expected: int, actual: int):
        super().__init__(
            f"Company was modified (version {actual}, update based on {expected})",
            ErrorCode.VERSION_CONFLICT.value,
        )


class JobNotFoundError(CareerStudioError):
    """Raised when job is not found."""

    status_code = 404

    def __init__(self, job_id: str):
        super().__init__(f"Job not found: {job_id}", ErrorCode.JOB_NOT_FOUND.value)


class StorageError(CareerStudioError):
    """Raised when storage operations fail."""

    status_code = 502

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message, code or ErrorCode.STORAGE_ERROR.value)


class UploadValidationError(CareerStudioError):
    """Raised when an uploaded file is rejected."""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.UPLOAD_VALIDATION_ERROR.value)


class UploadNotFoundError(CareerStudioError):
    """Raised when an uploaded file does not exist."""

    status_code = 404

    def __init__(self, filename: str):
        super().__init__(f"File not found: {filename}", ErrorCode.UPLOAD_NOT_FOUND.value)
