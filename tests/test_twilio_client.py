import unittest
from unittest.mock import MagicMock

from twilio.base.exceptions import TwilioRestException

from backend.twilio_client import TwilioMessenger


SENDER = "whatsapp:+14155238886"


class TwilioMessengerTests(unittest.TestCase):
    def setUp(self):
        self.client = MagicMock()
        self.client.messages.create.return_value.sid = "SM123"
        self.messenger = TwilioMessenger("AC123", "token", SENDER, client=self.client)

    def test_send_text(self):
        sid = self.messenger.send_text("whatsapp:+6591234567", "hello")
        self.assertEqual(sid, "SM123")
        self.client.messages.create.assert_called_once_with(
            body="hello",
            from_=SENDER,
            to="whatsapp:+6591234567"
        )

    def test_send_failure_is_swallowed(self):
        self.client.messages.create.side_effect = TwilioRestException(400, "/Messages", "bad number")
        self.assertIsNone(self.messenger.send_text("whatsapp:+0", "hello"))

    def test_network_failure_is_swallowed(self):
        self.client.messages.create.side_effect = ConnectionError("down")
        self.assertIsNone(self.messenger.send_text("whatsapp:+0", "hello"))

    def test_unconfigured_does_not_call_twilio(self):
        messenger = TwilioMessenger("", "", SENDER, client=self.client)
        self.assertFalse(messenger.configured)
        self.assertIsNone(messenger.send_text("whatsapp:+0", "hello"))
        self.client.messages.create.assert_not_called()

    def test_broadcast_counts_successes(self):
        self.client.messages.create.side_effect = [
            MagicMock(sid="SM1"),
            TwilioRestException(500, "/Messages"),
            MagicMock(sid="SM3"),
        ]
        sent = self.messenger.broadcast(["a", "b", "c"], "online")
        self.assertEqual(sent, 2)
        self.assertEqual(self.client.messages.create.call_count, 3)


if __name__ == "__main__":
    unittest.main()
