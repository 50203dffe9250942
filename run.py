#!/usr/bin/env python3
"""Simple script to run the API server."""
import uvicorn

if __name__ == "__main__":
    print("=" * 60)
    print("Starting Allora Inference Agent API")
    print("=" * 60)
    print("\nServer will start at: http://localhost:8000")
    print("API docs available at: http://localhost:8000/docs")
    print("=" * 60)
    print()

    uvicorn.run(
        "allora_k.api_server:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
        log_level="info"
    )
