# This project was developed with assistance from AI tools.
"""RFC 7807 Problem Details error response schema."""

from pydantic import Field

from . import ApiModel


class ErrorResponse(ApiModel):
    """RFC 7807 Problem Details, extended with a machine-readable ``code``.

    See https://datatracker.ietf.org/doc/html/rfc7807
    """

    type: str = Field(
        default="about:blank",
        description="Problem type URI; about:blank for plain HTTP errors.",
    )
    title: str = Field(description="HTTP reason phrase for the status.")
    status: int = Field(description="Response status code.")
    detail: str = Field(
        default="",
        description="What went wrong with this request.",
    )
    code: str | None = Field(
        default=None,
        description="Domain error code, e.g. 'non_amortizing_payment'.",
    )
    request_id: str = Field(
        default="",
        description="X-Request-ID header, or a generated id when absent.",
    )
