"""
Run the pipeline service.

Usage:
    python -m snaptranslate.scripts.serve
    CAMERA_ADAPTER=mock VISION_ADAPTER=mock TRANSLATE_ADAPTER=mock python -m snaptranslate.scripts.serve
"""
import logging

import uvicorn

from snaptranslate.services.api import create_app
from snaptranslate.services.config import Settings


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    settings = Settings.from_env()
    uvicorn.run(create_app(settings=settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
