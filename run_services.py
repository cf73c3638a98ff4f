import uvicorn

from shared.core.config import settings


def start_server():
    config = uvicorn.Config(
        "grocery_service.app.main:app",
        host="0.0.0.0",
        port=8002,
        reload=True,
        log_level=settings.LOG_LEVEL.lower(),
    )
    server = uvicorn.Server(config)
    server.run()


if __name__ == "__main__":
    try:
        start_server()
    except KeyboardInterrupt:
        print("\nShutting down server...")
