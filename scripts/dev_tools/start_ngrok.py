"""
Start ngrok tunnel and display the Twilio webhook URL
"""
import time

from pyngrok import ngrok

from config.config import Config

print("="*80)
print("STARTING NGROK TUNNEL".center(80))
print("="*80)

print(f"\n🚀 Starting ngrok tunnel on port {Config.PORT}...")
tunnel = ngrok.connect(Config.PORT)
public_url = tunnel.public_url

print(f"\n✅ Ngrok tunnel started successfully!")
print(f"\n{'='*80}")
print(f"PUBLIC URL: {public_url}")
print(f"{'='*80}")
print(f"\n📋 Twilio WhatsApp sandbox configuration:")
print(f"   When a message comes in: {public_url}/twilio-webhook")
print(f"   Status callback URL:     {public_url}/twilio-status")
print(f"\n   Set PUBLIC_WEBHOOK_URL={public_url}/twilio-webhook to show it in the startup banner.")
print(f"\n{'='*80}")
print(f"\n⏳ Tunnel is active. Press Ctrl+C to stop...")
print(f"{'='*80}\n")

try:
    # Keep running
    while True:
        time.sleep(1)
except KeyboardInterrupt:
    print("\n\n🛑 Stopping ngrok tunnel...")
    ngrok.disconnect(public_url)
    print("✅ Tunnel stopped")
