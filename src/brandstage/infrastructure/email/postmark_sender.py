"""Postmark email sender - templated email over the Postmark HTTP API."""

from typing import Any

import httpx
import structlog

from brandstage.domain.value_objects import normalize_email

logger = structlog.get_logger()

POSTMARK_API_URL = "https://api.postmarkapp.com"


class EmailSendError(Exception):
    """Postmark rejected the message or could not be reached."""


class PostmarkEmailSender:
    """Sends Postmark template email. In dev mode messages are logged, not sent."""

    def __init__(
        self,
        server_token: str,
        from_email: str,
        from_name: str = "",
        message_stream: str = "outbound",
        dev_mode: bool = False,
        base_url: str = POSTMARK_API_URL,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not dev_mode and not server_token:
            raise ValueError("Postmark server token is required when dev mode is off")
        self._server_token = server_token
        self._from_email = normalize_email(from_email)
        self._from_name = from_name
        self._message_stream = message_stream
        self._dev_mode = dev_mode
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    async def send_template(
        self,
        to: str,
        template_alias: str,
        template_data: dict[str, Any],
        metadata: dict[str, str] | None = None,
    ) -> None:
        """Send one templated message."""
        to = normalize_email(to)
        if not to or not template_alias:
            raise ValueError("Recipient and template alias are required")

        sender = f"{self._from_name} <{self._from_email}>" if self._from_name else self._from_email
        body: dict[str, Any] = {
            "From": sender,
            "To": to,
            "TemplateAlias": template_alias,
            "TemplateModel": template_data,
            "MessageStream": self._message_stream,
        }
        if metadata:
            body["Metadata"] = {k: str(v) for k, v in metadata.items()}

        if self._dev_mode:
            logger.info("email_dev_mode", to=to, template=template_alias, model=template_data)
            return

        async with httpx.AsyncClient(
            base_url=self._base_url, timeout=self._timeout, transport=self._transport
        ) as client:
            try:
                resp = await client.post(
                    "/email/withTemplate",
                    json=body,
                    headers={
                        "Accept": "application/json",
                        "X-Postmark-Server-Token": self._server_token,
                    },
                )
                resp.raise_for_status()
            except httpx.HTTPError as e:
                raise EmailSendError(f"Failed to send email via Postmark: {e}") from e

        logger.info(
            "email_sent",
            to=to,
            template=template_alias,
            message_id=resp.json().get("MessageID"),
        )
