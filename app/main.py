"""Repo-root entrypoint for the job board API.

    uvicorn app.main:app --reload

or, using HOST / PORT from the environment (default 127.0.0.1:5000):

    python -m app.main
"""
import os

import uvicorn

from backend.app.main import app  # re-export

if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "5000")),
    )
