"""
Runtime settings, read from the environment after loading `.env`.

Service URLs and the API key are externally supplied; nothing here feeds the
pipeline's decisions beyond which adapters get wired in.
"""
import os
from dataclasses import dataclass

from dotenv import load_dotenv

VISION_API_URL = "https://vision.googleapis.com/v1/images:annotate"
TRANSLATE_API_URL = "https://translation.googleapis.com/language/translate/v2"


@dataclass
class Settings:
    api_key: str | None = None
    vision_api_url: str = VISION_API_URL
    translate_api_url: str = TRANSLATE_API_URL
    http_timeout_s: float = 15.0
    camera_adapter: str = "cv2"         # cv2 | mock
    vision_adapter: str = "google"      # google | mock
    translate_adapter: str = "google"   # google | mock
    camera_index: int = 0
    camera_front_index: int = 1
    mock_camera_dir: str | None = None
    source_lang: str = "en"
    target_lang: str = "de"
    host: str = "127.0.0.1"
    port: int = 8000

    @classmethod
    def from_env(cls, dotenv_path: str | None = ".env") -> "Settings":
        if dotenv_path:
            load_dotenv(dotenv_path=dotenv_path, override=False)
        return cls(
            api_key=os.getenv("GOOGLE_CLOUD_API_KEY") or None,
            vision_api_url=os.getenv("VISION_API_URL", VISION_API_URL),
            translate_api_url=os.getenv("TRANSLATE_API_URL", TRANSLATE_API_URL),
            http_timeout_s=float(os.getenv("HTTP_TIMEOUT_S", "15")),
            camera_adapter=os.getenv("CAMERA_ADAPTER", "cv2").lower(),
            vision_adapter=os.getenv("VISION_ADAPTER", "google").lower(),
            translate_adapter=os.getenv("TRANSLATE_ADAPTER", "google").lower(),
            camera_index=int(os.getenv("CAMERA_INDEX", "0")),
            camera_front_index=int(os.getenv("CAMERA_FRONT_INDEX", "1")),
            mock_camera_dir=os.getenv("MOCK_CAMERA_DIR") or None,
            source_lang=os.getenv("SOURCE_LANG", "en"),
            target_lang=os.getenv("TARGET_LANG", "de"),
            host=os.getenv("HOST", "127.0.0.1"),
            port=int(os.getenv("PORT", "8000")),
        )
