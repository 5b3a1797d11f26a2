# whatsapp_bot.py
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import BackgroundTasks, Depends, FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException

from config.config import Config
from valuation.commands import CommandDispatcher
from valuation.formatters import render_online_announcement
from valuation.inbound import process_inbound
from valuation.preferences import PreferenceStore

from .twilio_client import TwilioMessenger, get_messenger


# ---------------------------------- Shared state ---------------------------------------

_store: Optional[PreferenceStore] = None
_dispatcher: Optional[CommandDispatcher] = None


def get_preference_store() -> PreferenceStore:
    """Get the process-wide PreferenceStore"""
    global _store
    if _store is None:
        _store = PreferenceStore()
    return _store


def get_dispatcher() -> CommandDispatcher:
    """Get the process-wide CommandDispatcher bound to the shared store"""
    global _dispatcher
    if _dispatcher is None:
        _dispatcher = CommandDispatcher(get_preference_store())
    return _dispatcher


def announce_online(messenger: TwilioMessenger) -> int:
    """Tell the configured recipients the bot is up"""
    if not Config.ANNOUNCE_ON_STARTUP or not Config.ANNOUNCE_RECIPIENTS:
        return 0
    sent = messenger.broadcast(Config.ANNOUNCE_RECIPIENTS, render_online_announcement())
    print(f"📣 Online announcement sent to {sent}/{len(Config.ANNOUNCE_RECIPIENTS)} recipient(s)")
    return sent


@asynccontextmanager
async def lifespan(app: FastAPI):
    messenger_provider = app.dependency_overrides.get(get_messenger, get_messenger)
    await run_in_threadpool(announce_online, messenger_provider())
    yield


app = FastAPI(title="Valuation Bot", lifespan=lifespan)


# ---------------------------------------------------------------------------------------


async def read_payload(request: Request) -> Dict[str, Any]:
    """
    Read a Twilio webhook body.

    Twilio posts application/x-www-form-urlencoded; JSON is accepted too.
    Unreadable bodies come back as an empty dict.
    """
    content_type = request.headers.get("content-type", "")
    try:
        if "application/json" in content_type:
            data = await request.json()
            return data if isinstance(data, dict) else {}

        form = await request.form()
        return {k: v for k, v in form.items() if isinstance(v, str)}
    except (ValueError, MultiPartException, StarletteHTTPException) as e:
        print(f"⚠️ Could not read webhook body: {e}")
        return {}


@app.get("/")
def health_check():
    return {
        "status": "healthy",
        "service": "Valuation Bot"
    }


@app.get("/test")
def test_endpoint():
    return PlainTextResponse("Valuation Bot is running!")


@app.post("/twilio-status")
async def receive_status(request: Request):
    """POST /twilio-status — Twilio delivery status callbacks"""
    payload = await read_payload(request)
    print("📬 Received status callback:", payload)
    return JSONResponse({"status": "ok"}, status_code=200)


@app.post("/twilio-webhook")
async def receive_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    dispatcher: CommandDispatcher = Depends(get_dispatcher),
    messenger: TwilioMessenger = Depends(get_messenger)
):
    """
    POST /twilio-webhook — called by Twilio when a user sends a WhatsApp message.
    Steps:
      1. Drop status callbacks and payloads without a Body
      2. Parse the command and build a reply
      3. Send the reply in the background and acknowledge immediately
    """
    payload = await read_payload(request)
    outcome = process_inbound(payload, dispatcher, Config.DEFAULT_SENDER)

    if outcome.should_send:
        background_tasks.add_task(messenger.send_text, outcome.recipient, outcome.reply)

    return JSONResponse({"status": outcome.status}, status_code=200)


if __name__ == "__main__":
    import uvicorn
    print("\n" + "="*80)
    print("🚀 Starting Valuation Bot")
    print("="*80)
    print(f"📍 Webhook endpoint: http://{Config.HOST}:{Config.PORT}/twilio-webhook")
    if Config.PUBLIC_WEBHOOK_URL:
        print(f"🌐 Public webhook URL: {Config.PUBLIC_WEBHOOK_URL}")
    print(f"📤 Sending from: {Config.TWILIO_WHATSAPP_FROM or '(not configured)'}")
    print(f"📣 Startup recipients: {', '.join(Config.ANNOUNCE_RECIPIENTS) or '(none)'}")
    print("="*80 + "\n")

    uvicorn.run(app, host=Config.HOST, port=Config.PORT, log_level=Config.LOG_LEVEL)
