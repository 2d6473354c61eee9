import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional

import requests


logger = logging.getLogger(__name__)

WORKFLOW_IN_PROGRESS = "in_progress"


@dataclass
class Workflow:
    workflowStatus: str = WORKFLOW_IN_PROGRESS


@dataclass
class EnvelopeDefinition:
    workflow: Workflow = field(default_factory=Workflow)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class ApiException(Exception):
    """Raised when the eSignature REST API rejects a call or cannot be reached.

    ``body`` holds the decoded JSON error document (``errorCode``/``message``)
    when the server sent one, otherwise ``None``.
    """

    def __init__(self, status: Optional[int] = None, reason: str = "", body: Optional[Dict[str, Any]] = None):
        self.status = status
        self.reason = reason
        self.body = body
        super().__init__(f"({status}) {reason}" if status else reason)


class EnvelopesApi:
    """Minimal client for the envelope endpoints of the eSignature REST API."""

    def __init__(self, session: Optional[requests.Session] = None, timeout: float = 30):
        self.session = session or requests.Session()
        self.timeout = timeout
        self.base_path = ""
        self.default_headers: Dict[str, str] = {}

    def set_base_path(self, base_path: str) -> None:
        self.base_path = base_path.rstrip("/")

    def add_default_header(self, name: str, value: str) -> None:
        self.default_headers[name] = value

    def update(
        self,
        account_id: str,
        envelope_id: str,
        envelope_definition: EnvelopeDefinition,
        resend_envelope: bool = False,
    ) -> Dict[str, Any]:
        url = f"{self.base_path}/v2.1/accounts/{account_id}/envelopes/{envelope_id}"
        params = {"resend_envelope": "true"} if resend_envelope else {}
        try:
            response = self.session.put(
                url,
                params=params,
                json=envelope_definition.to_dict(),
                headers=self.default_headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise ApiException(reason=str(exc)) from exc
        if not response.ok:
            try:
                body = response.json()
            except ValueError:
                body = None
            raise ApiException(response.status_code, response.reason or "", body)
        try:
            return response.json()
        except ValueError as exc:
            raise ApiException(response.status_code, "invalid JSON response") from exc


def unpause_workflow(args: Dict[str, str], api: Optional[EnvelopesApi] = None) -> Dict[str, str]:
    """Resume a paused envelope workflow and resend it to the next recipient.

    ``args`` must carry ``access_token``, ``base_path``, ``account_id`` and
    ``envelope_id``. Errors propagate as :class:`ApiException`.
    """
    api = api or EnvelopesApi()
    envelope_definition = EnvelopeDefinition(workflow=Workflow(workflowStatus=WORKFLOW_IN_PROGRESS))

    api.set_base_path(args["base_path"])
    api.add_default_header("Authorization", "Bearer " + args["access_token"])

    logger.info("Unpausing workflow for envelope %s", args["envelope_id"])
    result = api.update(
        args["account_id"],
        args["envelope_id"],
        envelope_definition,
        resend_envelope=True,
    )
    return {"envelope_id": result.get("envelopeId", "")}
