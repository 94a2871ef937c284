"""Email sender port - templated transactional email."""

from typing import Any, Protocol


class EmailSender(Protocol):
    """Port for sending templated email."""

    async def send_template(
        self,
        to: str,
        template_alias: str,
        template_data: dict[str, Any],
        metadata: dict[str, str] | None = None,
    ) -> None: ...
