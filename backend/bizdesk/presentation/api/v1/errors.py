"""Translation of domain exceptions into HTTP errors."""

from fastapi import HTTPException, status
from fastapi.responses import StreamingResponse

from bizdesk.application.services import RenderedDocument
from bizdesk.domain.exceptions import (
    BusinessRuleError,
    DuplicateEntityError,
    EmptyReportError,
    EntityInUseError,
    EntityNotFoundError,
    InvalidStatusTransitionError,
)

DOMAIN_ERRORS = (
    EntityNotFoundError,
    DuplicateEntityError,
    EntityInUseError,
    InvalidStatusTransitionError,
    BusinessRuleError,
    EmptyReportError,
)

_STATUS_BY_ERROR: dict[type[Exception], int] = {
    EntityNotFoundError: status.HTTP_404_NOT_FOUND,
    EmptyReportError: status.HTTP_404_NOT_FOUND,
    DuplicateEntityError: status.HTTP_409_CONFLICT,
    EntityInUseError: status.HTTP_409_CONFLICT,
    InvalidStatusTransitionError: status.HTTP_409_CONFLICT,
    BusinessRuleError: 422,
}


def http_error(exc: Exception) -> HTTPException:
    """Map a domain exception to the matching HTTPException."""
    code = _STATUS_BY_ERROR.get(type(exc), status.HTTP_400_BAD_REQUEST)
    return HTTPException(status_code=code, detail=str(exc))


def pdf_response(document: RenderedDocument) -> StreamingResponse:
    return StreamingResponse(
        iter([document.content]),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{document.filename}"'},
    )
