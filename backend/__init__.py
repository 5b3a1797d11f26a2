"""
Webhook application, Twilio client and local simulators
"""
