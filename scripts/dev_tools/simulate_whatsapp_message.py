"""
Simulate a WhatsApp message to test the full flow locally
Bypasses Twilio and directly calls the webhook with a form-encoded payload
"""
import sys

import requests

print("="*80)
print("SIMULATING WHATSAPP MESSAGE".center(80))
print("="*80)

sender = "whatsapp:+6591234567"
body = " ".join(sys.argv[1:]) or "/calculate 15000"

# Form fields Twilio sends for an inbound WhatsApp message
webhook_payload = {
    "MessageSid": "SM00000000000000000000000000000000",
    "From": sender,
    "To": "whatsapp:+14155238886",
    "Body": body,
}

print(f"\n📤 Simulating WhatsApp message:")
print(f"   From: {sender}")
print(f"   Message: \"{body}\"")

# Send to local webhook
webhook_url = "http://localhost:8080/twilio-webhook"

print(f"\n🔄 Sending to webhook: {webhook_url}")

try:
    response = requests.post(webhook_url, data=webhook_payload, timeout=30)

    print(f"\n📊 Webhook Response:")
    print(f"   Status: {response.status_code}")
    print(f"   Response: {response.json()}")

    if response.ok:
        print(f"\n✅ SUCCESS!")
        print(f"\n💬 The webhook should have:")
        print(f"   1. Received the message")
        print(f"   2. Parsed the command and built a reply")
        print(f"   3. Sent the reply through Twilio")
        print(f"\n📱 Check the webhook logs to see what happened!")
    else:
        print(f"\n❌ Webhook returned error")

except requests.RequestException as e:
    print(f"\n❌ Error: {e}")

print("\n" + "="*80)
