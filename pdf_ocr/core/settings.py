from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = Field(default="pdf-ocr-tool", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    ocr_lang: str = Field(default="eng", alias="OCR_LANG")
    ocr_dpi: int = Field(default=300, gt=0, alias="OCR_DPI")
    ocr_text_threshold: int = Field(default=50, ge=0, alias="OCR_TEXT_THRESHOLD")
    ocr_preserve_layout: bool = Field(default=False, alias="OCR_PRESERVE_LAYOUT")
    ocr_scratch_dir: Path | None = Field(default=None, alias="OCR_SCRATCH_DIR")
    ocr_det_model_dir: str | None = Field(default=None, alias="OCR_DET_MODEL_DIR")
    ocr_rec_model_dir: str | None = Field(default=None, alias="OCR_REC_MODEL_DIR")

    image_jpeg_quality: int = Field(default=95, ge=1, le=100, alias="IMAGE_JPEG_QUALITY")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
