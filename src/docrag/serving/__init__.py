"""
Serving — FastAPI application for the setup and read operations.

Run locally with ``docrag serve`` or ``uvicorn docrag.serving.app:app``.
"""
