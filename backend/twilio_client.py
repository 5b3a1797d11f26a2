"""
Outbound WhatsApp messaging through Twilio
"""
from typing import Iterable, Optional

from twilio.base.exceptions import TwilioException
from twilio.rest import Client

from config.config import Config


class TwilioMessenger:
    """Sends text messages; failures are logged and never raised"""

    def __init__(
        self,
        account_sid: str,
        auth_token: str,
        from_number: str,
        client: Optional[Client] = None
    ):
        self.account_sid = account_sid
        self.auth_token = auth_token
        self.from_number = from_number
        self._client = client

    @property
    def configured(self) -> bool:
        return bool(self.account_sid and self.auth_token and self.from_number)

    def _get_client(self) -> Client:
        if self._client is None:
            self._client = Client(self.account_sid, self.auth_token)
        return self._client

    def send_text(self, to_number: str, body: str) -> Optional[str]:
        """
        Send a text message to a WhatsApp user.

        Args:
            to_number: Recipient, e.g. "whatsapp:+6591234567"
            body: Message text

        Returns:
            Twilio message SID on success, None otherwise
        """
        if not self.configured:
            print("❌ Missing TWILIO_ACCOUNT_SID, TWILIO_AUTH_TOKEN or TWILIO_WHATSAPP_FROM in environment.")
            return None

        try:
            message = self._get_client().messages.create(
                body=body,
                from_=self.from_number,
                to=to_number
            )
        except (TwilioException, OSError) as e:
            print(f"❌ Error sending message to {to_number}: {e}")
            return None

        print(f"✅ Message sent with SID: {message.sid}")
        return message.sid

    def broadcast(self, recipients: Iterable[str], body: str) -> int:
        """Send the same text to every recipient; returns how many succeeded"""
        sent = 0
        for recipient in recipients:
            if self.send_text(recipient, body):
                sent += 1
        return sent


# Singleton instance
_messenger: Optional[TwilioMessenger] = None


def get_messenger() -> TwilioMessenger:
    """Get singleton TwilioMessenger instance"""
    global _messenger
    if _messenger is None:
        _messenger = TwilioMessenger(
            Config.TWILIO_ACCOUNT_SID,
            Config.TWILIO_AUTH_TOKEN,
            Config.TWILIO_WHATSAPP_FROM
        )
    return _messenger
