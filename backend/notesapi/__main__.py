"""
Process entry point: `python -m notesapi` or the `notes-api` console script.

Runs uvicorn against notesapi.main:app using the configured host and port.
"""

import uvicorn

from notesapi.config import settings


def main() -> None:
    uvicorn.run(
        "notesapi.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
