"""Core data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError

from huobiapi.data.errors import HuobiDecodeError

ERROR_STATUS = "error"


class Credentials(BaseModel):
    model_config = ConfigDict(frozen=True)

    api_key: str = Field(repr=False)
    secret_key: SecretStr

    @property
    def masked_key(self) -> str:
        return f"{self.api_key[:4]}***" if self.api_key else ""


class ResponseEnvelope(BaseModel):
    """Uniform wrapper Huobi puts around every REST response.

    Only ``status`` decides success; every other key is kept as-is so the
    full envelope can be reported back on failure.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    status: Optional[str] = None
    err_code: Any = Field(default=None, alias="err-code")
    err_msg: Any = Field(default=None, alias="err-msg")
    data: Any = None


@dataclass(frozen=True)
class Success:
    body: str


@dataclass(frozen=True)
class Failure:
    code: Any
    message: Any
    envelope: dict[str, Any] = field(default_factory=dict)


Outcome = Union[Success, Failure]


def parse_envelope(body: str) -> Outcome:
    """Decode a response body into Success (raw body kept) or Failure.

    A missing ``status`` counts as success.
    Raises HuobiDecodeError if the body is not a JSON object.
    """
    try:
        envelope = ResponseEnvelope.model_validate_json(body)
    except ValidationError as exc:
        errors = exc.errors()
        reason = errors[0]["msg"] if errors else str(exc)
        raise HuobiDecodeError(body, reason) from exc

    if envelope.status == ERROR_STATUS:
        return Failure(
            code=envelope.err_code,
            message=envelope.err_msg,
            envelope=envelope.model_dump(by_alias=True),
        )
    return Success(body=body)
