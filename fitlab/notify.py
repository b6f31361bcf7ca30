# fitlab/notify.py
import logging
import requests

from .config import ADMIN_WEBHOOK_URL, ADMIN_WEBHOOK_TIMEOUT

logger = logging.getLogger(__name__)


def _post_webhook(payload: dict) -> tuple:
    """
    Internal: POST payload to the admin webhook.
    Returns (ok: bool, status_code: int, response_json: dict | str).
    """
    if not ADMIN_WEBHOOK_URL:
        logger.info(f"[NOTIFY] Webhook disabled, not sent: {payload.get('event')}")
        return False, 0, "disabled"
    try:
        resp = requests.post(ADMIN_WEBHOOK_URL, json=payload, timeout=ADMIN_WEBHOOK_TIMEOUT)
        try:
            body = resp.json()
        except ValueError:
            body = resp.text
        ok = 200 <= resp.status_code < 300
        if not ok:
            logger.error(f"[NOTIFY FAIL] status={resp.status_code} body={body}")
        return ok, resp.status_code, body
    except requests.RequestException as e:
        logger.exception("Failed to post admin notification")
        return False, 0, str(e)


def notify_admin(event: str, text: str, **details) -> dict:
    """
    Send an admin notice (class created / updated / deleted, rota advisories).
    Never raises.
    """
    payload = {"event": event, "text": text}
    if details:
        payload["details"] = details
    ok, status, body = _post_webhook(payload)
    return {"ok": ok, "status_code": status, "response": body}
