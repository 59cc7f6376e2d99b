from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarHTTP

from .logging_config import logger, log_failure


class EligibilityError(Exception):
    """Base class for failures raised while evaluating eligibility."""

    error_code = "ELIGIBILITY_ERROR"
    status_code = 500


class ApplicantNotFoundError(EligibilityError):
    error_code = "APPLICANT_NOT_FOUND"

    def __init__(self, applicant_id: str):
        self.applicant_id = applicant_id
        super().__init__(f"Applicant not found: {applicant_id}")


class MalformedDateError(EligibilityError):
    error_code = "MALFORMED_DATE"

    def __init__(self, applicant_id: str, value):
        self.applicant_id = applicant_id
        self.value = value
        super().__init__(f"Malformed date_of_birth {value!r} for applicant {applicant_id}")


class MalformedApplicantError(EligibilityError):
    error_code = "MALFORMED_APPLICANT"

    def __init__(self, applicant_id: str, reason: str):
        self.applicant_id = applicant_id
        super().__init__(f"Malformed applicant {applicant_id}: {reason}")


class MalformedCriteriaError(EligibilityError):
    error_code = "MALFORMED_CRITERIA"

    def __init__(self, criteria_id: str | None, reason: str):
        self.criteria_id = criteria_id
        super().__init__(f"Malformed criteria {criteria_id}: {reason}")


class StoreUnavailableError(EligibilityError):
    error_code = "STORE_UNAVAILABLE"
    status_code = 503


def install_error_handlers(app):
    @app.exception_handler(StarHTTP)
    async def http_exc(_: Request, exc: StarHTTP):
        return JSONResponse({"error": f"HTTP_{exc.status_code}", "detail": exc.detail}, status_code=exc.status_code)

    @app.exception_handler(EligibilityError)
    async def eligibility_exc(request: Request, exc: EligibilityError):
        log_failure(exc.error_code, {"path": request.url.path, "detail": str(exc)})
        return JSONResponse({"error": exc.error_code, "detail": str(exc)}, status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def unhandled(_: Request, exc: Exception):
        logger.exception(f"Unhandled exception: {exc}")
        return JSONResponse({"error": "INTERNAL_ERROR", "detail": "Unexpected error"}, status_code=500)
