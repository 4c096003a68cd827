"""
Console client for the breathing coach WebSocket.

Usage:
    python demo_breathing_ws.py [pattern_id] [cycles]

Requirements:
- Start the server first: uvicorn heartsheal.application.api:app --reload
- Cue audio arrives as binary frames and is only counted here

Press Ctrl+C to stop. The completed session is saved with a short note.
"""

import asyncio
import json
import sys

import websockets

WS_URL = "ws://localhost:8000/ws"


async def run_session(pattern_id: str, cycles: int):
    """Start a session, print its events and save the summary."""
    print(f"Connecting to {WS_URL}...")
    audio_frames = 0

    async with websockets.connect(WS_URL) as websocket:
        await websocket.send(json.dumps({
            "type": "session.create",
            "pattern_id": pattern_id,
            "total_cycles": cycles,
            "counter": {"enabled": True, "sound": "voice", "frequency": "every-second"},
        }))

        async for raw in websocket:
            if isinstance(raw, bytes):
                audio_frames += 1
                continue

            message = json.loads(raw)
            msg_type = message.get("type")

            if msg_type == "timer.tick":
                continue
            elif msg_type == "countdown.tick":
                print(message["count"] or "Begin")
            elif msg_type == "phase.changed":
                print(f"-> {message['phase']} ({message['duration']}s)")
            elif msg_type == "counter.tick":
                print(f"   {message['count']}")
            elif msg_type == "cycle.completed":
                print(f"Cycle {message['cycles_completed']}/{message['total_cycles']}")
            elif msg_type == "session.completed":
                print(f"Session complete in {message['formatted_duration']}")
                await websocket.send(json.dumps({"type": "summary.save", "notes": "Saved from demo client"}))
            elif msg_type == "summary.saved":
                print(f"Saved summary {message['summary']['id']}")
                break
            else:
                print(message)

    print(f"Received {audio_frames} audio cue frames")


if __name__ == "__main__":
    pattern = sys.argv[1] if len(sys.argv) > 1 else "box"
    total = int(sys.argv[2]) if len(sys.argv) > 2 else 1
    try:
        asyncio.run(run_session(pattern, total))
    except KeyboardInterrupt:
        print("\nStopped")
