"""
Airtable Service - forwards a single insight to an Airtable table as a new
row.

The message always goes to the configured message column.  The description
is only sent when a description column is configured and the insight
actually has one; an empty value is omitted rather than written.
"""

import logging
from urllib.parse import quote

import requests

from messages_from_today import config
from messages_from_today.errors import ConfigurationError, ForwardingError
from messages_from_today.models import Insight
from messages_from_today.settings import ForwardingConfig

logger = logging.getLogger(__name__)

DEFAULT_MESSAGE_FIELD = "Message"


def _headers(api_key: str) -> dict:
    return {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }


def _check_config(forwarding: ForwardingConfig) -> None:
    if not forwarding.api_key:
        raise ConfigurationError("Airtable API key is not configured")
    if not forwarding.base_id:
        raise ConfigurationError("Airtable Base ID is not configured")
    if not forwarding.table_name:
        raise ConfigurationError("Airtable Table name is not configured")


def build_fields(insight: Insight, forwarding: ForwardingConfig) -> dict[str, str]:
    """Map an insight onto the configured Airtable column names."""
    fields = {forwarding.message_field or DEFAULT_MESSAGE_FIELD: insight.message}
    if forwarding.description_field and insight.description:
        fields[forwarding.description_field] = insight.description
    return fields


def _error_message(resp: requests.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        return resp.text[:200]
    error = data.get("error") if isinstance(data, dict) else None
    if isinstance(error, dict):
        return error.get("message") or error.get("type") or ""
    return str(error or "")


def send_message(insight: Insight, forwarding: ForwardingConfig) -> None:
    """Create one Airtable record for ``insight``."""
    _check_config(forwarding)

    url = f"{config.AIRTABLE_API_BASE}/{forwarding.base_id}/{quote(forwarding.table_name, safe='')}"
    fields = build_fields(insight, forwarding)
    field_names = list(fields)

    try:
        resp = requests.post(
            url,
            headers=_headers(forwarding.api_key),
            json={"records": [{"fields": fields}]},
            timeout=config.AIRTABLE_TIMEOUT,
        )
    except requests.RequestException as exc:
        logger.exception("Failed to reach Airtable for '%s'", insight.message)
        raise ForwardingError(f"Airtable request failed: {exc}", fields=field_names) from exc

    if resp.status_code == 200:
        logger.info("Sent to Airtable: %s", insight.message)
        return

    detail = _error_message(resp)
    logger.error("Airtable rejected record (%s): %s", resp.status_code, detail)
    if resp.status_code == 422:
        raise ForwardingError(
            f"Airtable rejected the record ({resp.status_code}): {detail}. "
            f"Fields sent: {', '.join(field_names)}. Check the field names in settings.",
            status=resp.status_code,
            fields=field_names,
        )
    raise ForwardingError(
        f"Airtable API error: {resp.status_code} {detail}".rstrip(),
        status=resp.status_code,
        fields=field_names,
    )


class AirtableService:
    """Forwarding bound to one snapshot of Airtable settings."""

    def __init__(self, forwarding: ForwardingConfig):
        self.forwarding = forwarding

    def send_message(self, insight: Insight) -> None:
        send_message(insight, self.forwarding)
