"""
FastAPI server entry point for the YouTube study notes service.
"""

import os
import argparse
import uvicorn
from dotenv import load_dotenv

from app.config import config


def main():
    """Run the notes API server."""
    load_dotenv()

    parser = argparse.ArgumentParser(description="YouTube Study Notes API")
    parser.add_argument("--host", default=os.getenv("HOST", "0.0.0.0"), help="Host to bind the server to")
    parser.add_argument("--port", type=int, default=int(os.getenv("PORT", "8000")), help="Port to bind the server to")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload for development")
    args = parser.parse_args()

    print(f"Starting {config.APP_NAME} API v{config.APP_VERSION} on {args.host}:{args.port}")
    print(f"Environment: {os.getenv('ENVIRONMENT', 'development')}, model: {config.NOTES_MODEL}")
    print(f"Notes endpoint: {config.PUBLIC_URL}/api/v1/generate-notes")

    uvicorn.run(
        "app.api.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=config.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
