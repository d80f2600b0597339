from datetime import datetime, timezone
import time

from flask import Blueprint, Response, current_app, jsonify, stream_with_context

main = Blueprint('main', __name__)

@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the Lue-Lue game server!'})

def heartbeat_events(interval: float, max_events: int = 0, sleep=time.sleep):
    """Yield an SSE heartbeat frame every `interval` seconds.

    Stops after `max_events` frames when it is positive, runs forever otherwise.
    """
    sent = 0
    while True:
        now = datetime.now(timezone.utc).isoformat()
        yield f"data: That's a update SSE at {now}\n\n"
        sent += 1
        if max_events and sent >= max_events:
            return
        sleep(interval)

@main.route('/events')
def sse_stream():
    cfg = current_app.config
    interval = float(cfg.get('SSE_HEARTBEAT_SEC', 30))
    max_events = int(cfg.get('SSE_MAX_EVENTS', 0))
    current_app.logger.info(f"[sse-open] interval={interval}s max_events={max_events or 'unbounded'}")
    return Response(
        stream_with_context(heartbeat_events(interval, max_events)),
        content_type='text/event-stream',
        headers={'Cache-Control': 'no-cache', 'X-Accel-Buffering': 'no'},
    )
