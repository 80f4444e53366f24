"""Translate failed service results into tagged HTTP error responses."""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from roomblock.domain.errors import ErrorCode, Result

ERROR_STATUS: dict[ErrorCode, int] = {
    ErrorCode.UNAUTHORIZED: status.HTTP_403_FORBIDDEN,
    ErrorCode.NOT_VERIFIED: status.HTTP_403_FORBIDDEN,
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.ALREADY_REGISTERED: status.HTTP_409_CONFLICT,
    ErrorCode.POLICY_EXISTS: status.HTTP_409_CONFLICT,
    ErrorCode.INVALID_DATES: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCode.INVALID_QUANTITY: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCode.INVALID_PERCENTAGE: status.HTTP_422_UNPROCESSABLE_ENTITY,
}


class OperationFailed(Exception):
    """Raised by routers to short-circuit with a failed envelope."""

    def __init__(self, code: ErrorCode) -> None:
        self.code = code
        super().__init__(code.value)


def unwrap(result: Result):
    """Return the result's value or raise ``OperationFailed`` with its code."""
    if not result.success:
        raise OperationFailed(result.error)
    return result.value


async def operation_failed_handler(request: Request, exc: OperationFailed) -> JSONResponse:
    return JSONResponse(
        status_code=ERROR_STATUS[exc.code],
        content={"success": False, "error": exc.code.value},
    )
