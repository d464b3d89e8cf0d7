"""
Fake classification service for running the client without the real endpoint.

Mimics the API Gateway contract on port 9000:
  POST /process-image {"image_base64", "system_prompt"} -> {"label", "description"}
  Oversize bodies    -> HTTP 413 {"message": "Request Entity Too Large"}
  FAKE_MODE=500      -> every call answers HTTP 500
  FAKE_MODE=garbled  -> 200 without a description

Usage:
    python -m organlens.scripts.fake_classifier_server
    CLASSIFIER_URL=http://127.0.0.1:9000/process-image python -m organlens.services.main
"""

import os
import random
import time
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

# API Gateway payload limit is 10MB; keep the fake tighter so 413 is easy to hit
MAX_BODY_BYTES = int(os.getenv("FAKE_MAX_BODY_BYTES", str(6 * 1024 * 1024)))
FAKE_MODE = os.getenv("FAKE_MODE", "ok")
DELAY_S = float(os.getenv("FAKE_DELAY_S", "0.8"))

_ORGANS = {
    "heart": ("Pumps blood around the frog's body.",
              "A frog's heart has three chambers instead of four."),
    "stomach": ("Breaks down the insects the frog swallows whole.",
                "Some frogs can throw up their whole stomach to clean it."),
    "lungs": ("Take in air so oxygen can reach the blood.",
              "Frogs also breathe through their skin."),
    "liver": ("Cleans the blood and stores energy.",
              "The liver is the biggest organ inside a frog."),
    "gall bladder": ("Stores bile that helps digest fat.",
                     "It sits tucked between the lobes of the liver."),
    "pancreas": ("Makes juices that help digest food.",
                 "It also makes insulin, just like in people."),
}

app = FastAPI(title="fake-classifier-server")


@app.post("/process-image")
async def process_image(request: Request):
    body = await request.body()
    if len(body) > MAX_BODY_BYTES:
        print(f"[classifier] 413 body={len(body)} bytes")
        return JSONResponse(status_code=413, content={"message": "Request Entity Too Large"})

    if FAKE_MODE == "500":
        return JSONResponse(status_code=500, content={"message": "Internal server error"})

    payload = await request.json()
    print(f"[classifier] image={len(payload.get('image_base64', ''))} b64 chars, "
          f"prompt={len(payload.get('system_prompt', ''))} chars — thinking for {DELAY_S:.1f}s ...")
    time.sleep(DELAY_S)

    if FAKE_MODE == "garbled":
        return {"label": "heart"}

    organ = random.choice(list(_ORGANS))
    function, fact = _ORGANS[organ]
    description = f"Organ Model: {organ}\nFunction in Frogs: {function}\nFun Fact: {fact}"
    return {"label": organ, "description": description}


if __name__ == "__main__":
    print("Fake classifier server starting on http://localhost:9000/process-image")
    uvicorn.run(app, host="0.0.0.0", port=9000)
