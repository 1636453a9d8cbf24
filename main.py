from __future__ import annotations

import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from voice_clarify.config import LLM_DEBUG, cors_origins
from voice_clarify.routes import router

app = FastAPI(title="voice-clarify")

if cors_origins:
  app.add_middleware(
      CORSMiddleware,
      allow_origins=cors_origins,
      allow_credentials=True,
      allow_methods=["*"],
      allow_headers=["*"],
  )

app.include_router(router)

if LLM_DEBUG:
  print(f"[VOICE_CLARIFY] CORS origins: {cors_origins or '(none)'}", flush=True)


if __name__ == "__main__":
  import uvicorn

  host = os.getenv("HOST", "0.0.0.0")
  port = int(os.getenv("PORT", "8000"))
  uvicorn.run(app, host=host, port=port)
