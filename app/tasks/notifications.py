import logging
import os
from celery import shared_task
from twilio.rest import Client

logger = logging.getLogger(__name__)


def _sms_enabled() -> bool:
    return os.getenv("OTP_SMS_ENABLED", "0").lower() in ("1", "true", "yes")


@shared_task(bind=True, max_retries=3, default_retry_delay=60)
def send_otp_sms_task(self, to: str, body: str) -> None:
    """Deliver an OTP by SMS through Twilio, or log it when SMS is disabled."""
    if not _sms_enabled():
        logger.info({"event": "otp_sms_disabled", "phone": to})
        return
    sid = os.getenv("TWILIO_ACCOUNT_SID")
    token = os.getenv("TWILIO_AUTH_TOKEN")
    sms_from = os.getenv("TWILIO_SMS_FROM")
    if not all([sid, token, sms_from]):
        logger.error("Twilio credentials missing; OTP SMS not sent")
        return
    try:
        message = Client(sid, token).messages.create(from_=sms_from, to=f"+91{to}", body=body)
    except Exception as exc:
        logger.warning("OTP SMS delivery failed: %s", exc)
        raise self.retry(exc=exc)
    logger.info("OTP SMS sent. SID: %s", message.sid)
