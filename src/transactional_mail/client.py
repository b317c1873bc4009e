"""HTTP client for the transactional email API.

Provides ``TransactionalClient``, which checks that an email is complete,
serializes it, POSTs it to the region-scoped ``/emails`` endpoint and maps
the HTTP outcome onto ``TransactionalResult`` or ``ErrorEnvelope``.

Each ``send`` opens and closes its own ``httpx.Client``.  Nothing is
retried: one call, one request, one outcome.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import httpx
import structlog
from pydantic import AnyHttpUrl, BaseModel, ConfigDict, SecretStr, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError

from transactional_mail.domain.errors import MissingFieldError, TransportError
from transactional_mail.domain.types import DEFAULT_ENDPOINT_BASE, DEFAULT_REGION, Region
from transactional_mail.email.message import TransactionalEmail
from transactional_mail.results import ErrorEnvelope, SendOutcome, TransactionalResult

if TYPE_CHECKING:
    from transactional_mail.config import Settings

logger = structlog.get_logger()

_HTTP_URL: TypeAdapter[AnyHttpUrl] = TypeAdapter(AnyHttpUrl)

SUCCESS_STATUSES = frozenset({200, 201})


class ClientConfig(BaseModel):
    """Validated connection settings held by a ``TransactionalClient``.

    Assignments are re-validated, so changing the region or endpoint on a
    live client is subject to the same checks as construction.
    """

    model_config = ConfigDict(validate_assignment=True)

    project_id: str
    access_key: str
    access_secret: SecretStr
    region: Region = DEFAULT_REGION
    endpoint_base: str = DEFAULT_ENDPOINT_BASE
    domain_id: str | None = None
    timeout: float | None = None

    @field_validator("endpoint_base")
    @classmethod
    def endpoint_base_must_be_url(cls, v: str) -> str:
        """Require an http(s) URL and normalize it to end with ``/``."""
        try:
            _HTTP_URL.validate_python(v)
        except PydanticValidationError as exc:
            raise ValueError(f"Invalid URL: {v!r}") from exc
        if not v.endswith("/"):
            v += "/"
        return v


def _transport_errno(exc: BaseException) -> int:
    """Return the first OS-level errno found in *exc*'s cause chain."""
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        errno = getattr(current, "errno", None)
        if isinstance(errno, int) and errno:
            return errno
        current = current.__cause__ or current.__context__
    return 0


def _error_message(response: httpx.Response) -> str:
    """Prefer the service's ``message`` field, else the reason phrase."""
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict):
        message = data.get("message")
        if isinstance(message, str) and message:
            return message
    return response.reason_phrase or f"HTTP {response.status_code}"


class TransactionalClient:
    """Sends ``TransactionalEmail`` instances to the transactional email API.

    Args:
        project_id: Project the emails are billed to.
        access_key: API access key identifier.
        access_secret: API secret key, sent as ``X-Auth-Token``.
        region: Deployment region, ``fr-par`` or ``nl-ams``.
        endpoint_base: Base URL that the region path is appended to.
        timeout: Request timeout in seconds.  ``None`` keeps the httpx
            default.
        transport: Optional httpx transport used instead of the network.

    Raises:
        pydantic.ValidationError: If the region or endpoint is invalid.
    """

    def __init__(
        self,
        project_id: str,
        access_key: str,
        access_secret: str,
        region: Region | str = DEFAULT_REGION,
        *,
        endpoint_base: str = DEFAULT_ENDPOINT_BASE,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._config = ClientConfig(
            project_id=project_id,
            access_key=access_key,
            access_secret=SecretStr(access_secret),
            region=region,  # type: ignore[arg-type]
            endpoint_base=endpoint_base,
            timeout=timeout,
        )
        self._transport = transport

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: httpx.BaseTransport | None = None,
    ) -> TransactionalClient:
        """Build a client from loaded ``Settings``.

        Credentials are checked first with ``validate_credentials``.

        Raises:
            ConfigurationError: In production mode, if credentials are missing.
            pydantic.ValidationError: If the region or endpoint is invalid.
        """
        from transactional_mail.config import validate_credentials

        validate_credentials(settings)
        client = cls(
            settings.default_project_id,
            settings.access_key,
            settings.secret_key.get_secret_value(),
            settings.default_region,
            endpoint_base=settings.tem_api_url,
            timeout=settings.http_timeout,
            transport=transport,
        )
        if settings.tem_domain_id:
            client.set_domain_id(settings.tem_domain_id)
        return client

    # -- Configuration ---------------------------------------------------------

    @property
    def project_id(self) -> str:
        return self._config.project_id

    @property
    def access_key(self) -> str:
        return self._config.access_key

    @property
    def region(self) -> Region:
        return self._config.region

    @property
    def endpoint_base(self) -> str:
        return self._config.endpoint_base

    @property
    def domain_id(self) -> str | None:
        return self._config.domain_id

    @property
    def emails_url(self) -> str:
        """Full URL that ``send`` posts to."""
        return f"{self._config.endpoint_base}{self._config.region.value}/emails"

    def set_region(self, region: Region | str) -> None:
        """Switch to another region.

        Raises:
            pydantic.ValidationError: If *region* is not supported.
        """
        self._config.region = region  # type: ignore[assignment]

    def set_endpoint_base(self, url: str) -> None:
        """Point the client at another API base URL.

        Raises:
            pydantic.ValidationError: If *url* is not an http(s) URL.
        """
        self._config.endpoint_base = url

    def set_domain_id(self, domain_id: str) -> None:
        """Record the sending domain identifier.

        The value is kept on the client for callers that need it; it is
        not part of the request sent by ``send``.
        """
        self._config.domain_id = domain_id

    def create_email(self) -> TransactionalEmail:
        """Return a new, empty email bound to this client's project."""
        return TransactionalEmail(project_id=self._config.project_id)

    # -- Sending ---------------------------------------------------------------

    @staticmethod
    def check_complete(email: TransactionalEmail) -> None:
        """Verify *email* has everything the API requires.

        Checks run in a fixed order and stop at the first failure.

        Raises:
            MissingFieldError: Naming the first missing field.
        """
        if email.from_ is None:
            raise MissingFieldError("from", "From recipient required.")
        if not email.to:
            raise MissingFieldError("to", "To recipient required.")
        if not email.subject:
            raise MissingFieldError("subject", "Subject required.")
        if not email.text and not email.html:
            raise MissingFieldError("text", "Text required.")
        if not email.project_id:
            raise MissingFieldError("project_id", "Project id required.")

    def send(self, email: TransactionalEmail) -> SendOutcome:
        """Send *email* with a single HTTPS POST.

        Args:
            email: A complete email, typically from ``create_email``.

        Returns:
            ``TransactionalResult`` on HTTP 200/201, otherwise an
            ``ErrorEnvelope`` holding the status code and raw body.  Fields
            of a success reply that do not fit the result models are left
            at their defaults rather than raising.

        Raises:
            MissingFieldError: If the email is incomplete.  No request is
                made in that case.
            TransportError: If the request could not be completed at the
                connection level.
        """
        self.check_complete(email)

        body = json.dumps(email.to_payload()).encode("utf-8")
        headers = {
            "X-Auth-Token": self._config.access_secret.get_secret_value(),
            "Content-Type": "application/json",
            "Content-Length": str(len(body)),
        }
        log = logger.bind(region=self._config.region.value, project_id=email.project_id)
        log.info(
            "transactional_email_sending",
            recipients=len(email.to),
            attachments=len(email.attachments),
            size=len(body),
        )

        try:
            with httpx.Client(**self._http_options()) as http:
                response = http.post(self.emails_url, content=body, headers=headers)
        except httpx.TransportError as exc:
            errno = _transport_errno(exc)
            log.error("transactional_email_transport_failed", error=str(exc), errno=errno)
            raise TransportError(str(exc) or type(exc).__name__, errno) from exc

        return self._handle_response(response, log)

    def _http_options(self) -> dict[str, Any]:
        options: dict[str, Any] = {}
        if self._config.timeout is not None:
            options["timeout"] = self._config.timeout
        if self._transport is not None:
            options["transport"] = self._transport
        return options

    @staticmethod
    def _handle_response(response: httpx.Response, log: Any) -> SendOutcome:
        status = response.status_code

        if status not in SUCCESS_STATUSES:
            message = _error_message(response)
            log.warning("transactional_email_rejected", status_code=status, message=message)
            return ErrorEnvelope(code=status, message=message, errno=0, detail=response.text)

        try:
            payload = response.json()
        except ValueError:
            log.warning("transactional_email_invalid_json", status_code=status)
            return ErrorEnvelope(
                code=status,
                message="Invalid JSON response",
                errno=0,
                detail=response.text,
            )

        try:
            result = TransactionalResult.from_response(payload)
        except PydanticValidationError as exc:
            log.warning(
                "transactional_email_unparsed_result",
                status_code=status,
                errors=exc.errors(include_input=False),
            )
            result = TransactionalResult()
        log.info("transactional_email_sent", status_code=status, emails=len(result.emails))
        return result
