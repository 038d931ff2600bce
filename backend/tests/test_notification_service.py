from unittest.mock import MagicMock, patch

import httpx

from app.services.notification_service import ApprovalNotifier


def _notifier(**overrides):
    options = {
        "webhook_url": "https://mail.example.com/send-approval-email",
        "api_key": "secret",
        "enabled": True,
        "timeout": 1.0,
        "max_retries": 2,
        "backoff_seconds": 0,
    }
    options.update(overrides)
    return ApprovalNotifier(**options)


def _response(status_code: int) -> httpx.Response:
    request = httpx.Request("POST", "https://mail.example.com/send-approval-email")
    return httpx.Response(status_code, request=request)


def test_disabled_notifier_does_not_post():
    with patch("app.services.notification_service.httpx.post") as mock_post:
        assert _notifier(enabled=False).send(recipient="a@example.com", name="A", status="approved") is False
    mock_post.assert_not_called()


def test_missing_recipient_is_skipped():
    with patch("app.services.notification_service.httpx.post") as mock_post:
        assert _notifier().send(recipient=None, name="A", status="approved") is False
    mock_post.assert_not_called()


def test_send_posts_payload_with_bearer_key():
    with patch("app.services.notification_service.httpx.post", return_value=_response(200)) as mock_post:
        ok = _notifier().send(recipient="a@example.com", name="Rajesh Kumar", status="rejected", reason="Incomplete")
    assert ok is True
    _, kwargs = mock_post.call_args
    assert kwargs["json"] == {"email": "a@example.com", "name": "Rajesh Kumar", "status": "rejected", "reason": "Incomplete"}
    assert kwargs["headers"]["Authorization"] == "Bearer secret"


def test_retries_server_errors_then_succeeds():
    responses = [_response(503), _response(502), _response(200)]
    with patch("app.services.notification_service.httpx.post", side_effect=responses) as mock_post:
        ok = _notifier().send(recipient="a@example.com", name="A", status="approved")
    assert ok is True
    assert mock_post.call_count == 3


def test_gives_up_after_bounded_retries():
    failing = MagicMock(side_effect=httpx.ConnectError("boom"))
    with patch("app.services.notification_service.httpx.post", failing):
        ok = _notifier(max_retries=1).send(recipient="a@example.com", name="A", status="approved")
    assert ok is False
    assert failing.call_count == 2


def test_client_error_is_not_retried():
    with patch("app.services.notification_service.httpx.post", return_value=_response(400)) as mock_post:
        ok = _notifier().send(recipient="a@example.com", name="A", status="approved")
    assert ok is False
    assert mock_post.call_count == 1
