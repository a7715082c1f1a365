"""
The DDNS update cycle.

One cycle discovers the public IP address, looks up the configured A record
and patches it when the content differs. Every failure raises a
``DDNSError``; nothing here terminates the process.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Literal

from cloudflare_ddns.cloudflare import CloudFlareClient
from cloudflare_ddns.errors import RecordNotFoundError, UpdateFailedError
from cloudflare_ddns.models import AuthScheme
from cloudflare_ddns.public_ip import fetch_public_ip

if TYPE_CHECKING:
    import httpx

    from cloudflare_ddns.config import Config


logger = logging.getLogger(__name__)


class UpdateResult:
    """
    Outcome of a successful update cycle.

    Attributes
    ----------
    action : Literal["updated", "unchanged"]
        Whether the record was patched.
    message : str
        Human-readable message.
    record_id : str
        The CloudFlare record identifier.
    record_name : str
        The record name.
    value : str
        The record content after the cycle.
    previous_value : str | None
        The content before the update (only for action="updated").
    """

    def __init__(
        self,
        *,
        action: Literal["updated", "unchanged"],
        message: str,
        record_id: str,
        record_name: str,
        value: str,
        previous_value: str | None = None,
    ) -> None:
        self.action = action
        self.message = message
        self.record_id = record_id
        self.record_name = record_name
        self.value = value
        self.previous_value = previous_value

    def __repr__(self) -> str:
        return (
            f"UpdateResult(action={self.action!r}, record_id={self.record_id!r}, "
            f"value={self.value!r}, previous_value={self.previous_value!r})"
        )


def run_update(config: Config, client: httpx.Client) -> UpdateResult:
    """
    Run one update cycle.

    Parameters
    ----------
    config : Config
        Application configuration.
    client : httpx.Client
        HTTP client used for every request.

    Returns
    -------
    UpdateResult
        The outcome when the record is up to date or was updated.

    Raises
    ------
    DDNSError
        On the first failure; no later step is attempted.
    """
    current_ip = fetch_public_ip(client)

    # Resolve the auth scheme before any CloudFlare request is made
    if config.verbose:
        logger.info("Auth method: %s", config.auth_method)
    auth_scheme = AuthScheme.from_method(config.auth_method)
    cloudflare = CloudFlareClient(config, auth_scheme, client)

    logger.info("Checking for A record %s.", config.record_name)
    records = cloudflare.list_a_records()

    logger.info("Count of records: %d", records.result_info.count)
    if records.result_info.count < 1 or not records.result:
        msg = f"Record does not exist for {config.sitename}. Try adding one first."
        raise RecordNotFoundError(msg)

    if config.verbose:
        logger.info("Records:\n%s", records.model_dump_json(indent=2))

    logger.info("The number of records seems good. Moving on.")

    existing = records.result[0]
    old_ip = existing.content
    if old_ip == current_ip:
        return UpdateResult(
            action="unchanged",
            message="Your public IP hasn't changed since last update. I will try again later.",
            record_id=existing.id,
            record_name=config.record_name,
            value=old_ip,
        )

    logger.info(
        "Updating %s (%s) from %s to %s.",
        existing.id,
        config.record_name,
        old_ip,
        current_ip,
    )
    update = cloudflare.update_record(existing.id, current_ip)

    if config.verbose:
        logger.info("New records:\n%s", update.model_dump_json(indent=2))

    if not update.success:
        msg = (
            f"Failed to update records for {existing.id} ({config.record_name}): "
            f"{update.error_summary()}"
        )
        raise UpdateFailedError(msg, existing.id, config.record_name)

    new_content = update.result.content if update.result is not None else current_ip
    return UpdateResult(
        action="updated",
        message=(
            f"Successfully updated records for {existing.id} "
            f"({config.record_name}): {new_content}"
        ),
        record_id=existing.id,
        record_name=config.record_name,
        value=new_content,
        previous_value=old_ip,
    )
