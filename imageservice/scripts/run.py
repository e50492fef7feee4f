"""Main entry point for the image service."""


def main() -> None:
    """Run the image service with uvicorn."""
    import os

    import uvicorn

    from imageservice.config import config

    port = int(os.getenv("BIND_PORT", str(config.PORT)))
    host = os.getenv("BIND_HOST", "127.0.0.1")

    uvicorn.run(
        "imageservice.main:app",
        host=host,
        port=port,
        reload=False,
    )


if __name__ == "__main__":
    main()
