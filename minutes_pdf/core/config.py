# minutes_pdf/core/config.py
from __future__ import annotations
from pathlib import Path
from typing import List, Tuple, Union

from pydantic_settings import BaseSettings, SettingsConfigDict
from reportlab.lib.pagesizes import A4, letter

PAGE_SIZES = {"A4": A4, "LETTER": letter}


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_env: str = "dev"
    log_level: str = "INFO"
    events_log_dir: Path = Path(__file__).resolve().parents[1] / "data" / "logs"

    # Page geometry (points)
    page_size: str = "A4"
    page_margin: float = 50

    # Paragraph blocks longer than this are cut with a visible marker
    paragraph_char_limit: int = 1400

    watermark_text: str = "CONFIDENTIAL"
    watermark_opacity: float = 0.12

    org_mark: str = "DM"
    recorder_label: str = "AI Generated"
    document_revision: str = "1.0"

    # Can be a comma-separated string OR a JSON-like list in env
    admin_roles: Union[str, List[str]] = "ADMIN,HEAD,CEO,CHAIRMAN,FOUNDER"

    def parsed_admin_roles(self) -> List[str]:
        v = self.admin_roles
        if isinstance(v, (list, tuple, set)):
            return [str(r).strip().upper() for r in v if str(r).strip()]
        return [r.strip().upper() for r in str(v).split(",") if r.strip()]

    def page_dimensions(self) -> Tuple[float, float]:
        size = PAGE_SIZES.get(self.page_size.upper())
        if size is None:
            raise ValueError(f"Unsupported page size: {self.page_size}")
        return size


settings = Settings()
