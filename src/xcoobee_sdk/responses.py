"""
Response envelopes returned by every public SDK operation.

Callers discriminate by type:

    response = await sdk.consents.request_consent("~someone", "ref1")
    if isinstance(response, ErrorResponse):
        print(response.code, response.error.message)
    else:
        print(response.result["ref_id"])
"""

from dataclasses import dataclass
from typing import Any, Optional

from xcoobee_sdk.config import DEFAULT_ERROR_CODE

SUCCESS_CODE = 200


class Response:
    """Base class of the response envelopes."""

    code: int

    @property
    def ok(self) -> bool:
        return isinstance(self, SuccessResponse)


class SuccessResponse(Response):
    """
    A successful call. `result` holds the payload verbatim.
    """

    def __init__(self, result: Any, code: int = SUCCESS_CODE):
        self.code = code
        self.result = result

    def __repr__(self):
        return f"{type(self).__name__}(code={self.code}, result={self.result!r})"


@dataclass(frozen=True)
class ResponseError:
    message: str
    cause: Optional[BaseException] = None


class ErrorResponse(Response):
    """
    A failed call.

    Args:
        code (int): Always the configured error code (400 by default); it is
            not derived from any underlying HTTP status.
        error (BaseException | str): The triggering error. Its message is kept
            verbatim in `error.message`.
    """

    def __init__(self, code: int = DEFAULT_ERROR_CODE, error: Any = None):
        self.code = code
        if isinstance(error, ResponseError):
            self.error = error
        elif isinstance(error, BaseException):
            message = getattr(error, "message", None) or str(error)
            self.error = ResponseError(message=message, cause=error)
        else:
            self.error = ResponseError(message=str(error))

    def __repr__(self):
        return f"ErrorResponse(code={self.code}, message={self.error.message!r})"
