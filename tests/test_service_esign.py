from unittest.mock import Mock

import pytest
import requests

from app.service_esign import ApiException, EnvelopeDefinition, EnvelopesApi, unpause_workflow


ARGS = {
    "access_token": "token-1",
    "base_path": "https://demo.docusign.net/restapi/",
    "account_id": "acct-1",
    "envelope_id": "env-1",
}


def _session(ok=True, status_code=200, reason="OK", body=None):
    response = Mock(ok=ok, status_code=status_code, reason=reason)
    response.json.return_value = body if body is not None else {}
    session = Mock(spec=requests.Session)
    session.put.return_value = response
    return session


def test_envelope_definition_serialises_workflow_status():
    assert EnvelopeDefinition().to_dict() == {"workflow": {"workflowStatus": "in_progress"}}


def test_unpause_issues_single_update_with_resend():
    session = _session(body={"envelopeId": "abc-123"})

    result = unpause_workflow(ARGS, EnvelopesApi(session=session, timeout=5))

    assert result == {"envelope_id": "abc-123"}
    session.put.assert_called_once()
    url = session.put.call_args.args[0]
    kwargs = session.put.call_args.kwargs
    assert url == "https://demo.docusign.net/restapi/v2.1/accounts/acct-1/envelopes/env-1"
    assert kwargs["params"] == {"resend_envelope": "true"}
    assert kwargs["json"] == {"workflow": {"workflowStatus": "in_progress"}}
    assert kwargs["headers"]["Authorization"] == "Bearer token-1"
    assert kwargs["timeout"] == 5


def test_update_without_resend_sends_no_query():
    session = _session(body={"envelopeId": "abc-123"})
    api = EnvelopesApi(session=session)

    api.update("acct-1", "env-1", EnvelopeDefinition())

    assert session.put.call_args.kwargs["params"] == {}


def test_error_body_is_attached_to_exception():
    session = _session(ok=False, status_code=400, reason="Bad Request", body={"errorCode": "X", "message": "Y"})

    with pytest.raises(ApiException) as excinfo:
        unpause_workflow(ARGS, EnvelopesApi(session=session))

    assert excinfo.value.status == 400
    assert excinfo.value.body == {"errorCode": "X", "message": "Y"}


def test_non_json_error_body_is_none():
    session = _session(ok=False, status_code=502, reason="Bad Gateway")
    session.put.return_value.json.side_effect = ValueError("no json")

    with pytest.raises(ApiException) as excinfo:
        EnvelopesApi(session=session).update("acct-1", "env-1", EnvelopeDefinition())

    assert excinfo.value.body is None
    assert "502" in str(excinfo.value)


def test_non_json_success_body_raises_api_exception():
    session = _session()
    session.put.return_value.json.side_effect = ValueError("not json")

    with pytest.raises(ApiException) as excinfo:
        unpause_workflow(ARGS, EnvelopesApi(session=session))

    assert excinfo.value.status == 200
    assert excinfo.value.body is None


def test_transport_error_is_wrapped():
    session = Mock(spec=requests.Session)
    session.put.side_effect = requests.ConnectionError("refused")

    with pytest.raises(ApiException) as excinfo:
        EnvelopesApi(session=session).update("acct-1", "env-1", EnvelopeDefinition())

    assert excinfo.value.status is None
    assert excinfo.value.body is None
