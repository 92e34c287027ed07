"""
Run the Prep Kitchen API with uvicorn.

Usage:
    python -m prep_kitchen
    python -m prep_kitchen --port 8001 --reload
    python -m prep_kitchen --log-level debug
"""

import argparse

import uvicorn


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the Prep Kitchen API")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind to (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=8000, help="Port to listen on (default: 8000)")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload for development")
    parser.add_argument(
        "--log-level",
        default="info",
        choices=["critical", "error", "warning", "info", "debug"],
        help="Uvicorn log level (default: info)",
    )
    args = parser.parse_args()

    print(f"Starting Prep Kitchen API on http://{args.host}:{args.port}")
    uvicorn.run(
        "prep_kitchen.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level,
    )


if __name__ == "__main__":
    main()
