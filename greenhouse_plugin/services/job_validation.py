"""
Job identifier validation.

Before a job id is written by hand, confirm it against the board: the job
must exist and be listed under the office it claims to belong to.
"""
import logging

import httpx

from greenhouse_plugin.exceptions import GreenhouseAPIError, JobValidationError
from greenhouse_plugin.models import GreenhouseJobDetail
from .greenhouse_client import GreenhouseClient

logger = logging.getLogger(__name__)


def _rejection(e: Exception, job_id: int, subject: str) -> JobValidationError:
    if not isinstance(e, GreenhouseAPIError):
        # Transport failure, no upstream status to report
        return JobValidationError(f"Could not verify {subject.lower()}: {e}", job_id=job_id)
    if e.is_not_found:
        message = f"{subject} was not found on the Greenhouse board. Check the id on the debug endpoint."
    elif e.is_unauthorized:
        message = f"Unauthorized while verifying {subject.lower()}. Check the Greenhouse URL token."
    else:
        message = f"Could not verify {subject.lower()}: {e.message}"
    return JobValidationError(message, job_id=job_id, upstream_status=e.upstream_status)


async def validate_job_id(client: GreenhouseClient, token: str, job_id: int) -> GreenhouseJobDetail:
    """
    Re-fetch a job and its owning office tree.

    Returns the job detail when the id checks out, raises JobValidationError
    with a message telling apart "not found", "unauthorized" and other
    upstream or connection failures otherwise.
    """
    try:
        detail = await client.get_job(token, job_id)
    except (GreenhouseAPIError, httpx.HTTPError) as e:
        raise _rejection(e, job_id, f"Job {job_id}") from e

    if not detail.offices or detail.offices[0].id is None:
        return detail

    office_ref = detail.offices[0]
    try:
        office = await client.get_office(token, office_ref.id)
    except (GreenhouseAPIError, httpx.HTTPError) as e:
        raise _rejection(e, job_id, f"Office {office_ref.id} of job {job_id}") from e
    if job_id not in office.job_ids():
        raise JobValidationError(
            f"Job {job_id} is not listed under its office {office.name or office_ref.id}.",
            job_id=job_id,
        )

    logger.debug(f"Validated job {job_id} under office {office.name!r}")
    return detail
