"""
Configuration — variables d'environnement.
Lues à l'appel (pas à l'import) pour que les tests puissent les surcharger.
"""
import os
from pathlib import Path
from typing import Optional

ROOT_DIR = Path(__file__).parent.parent
DATA_DIR = ROOT_DIR / "data"

_DEFAULT_MODELS = {
    "openai":    "gpt-4o-mini",
    "anthropic": "claude-haiku-4-5-20251001",
}


def db_path() -> str:
    return os.getenv("DB_PATH", str(DATA_DIR / "affiliate_builder.db"))


def db_url() -> str:
    return os.getenv("DB_URL", f"sqlite:///{db_path()}")


def uploads_dir() -> Path:
    return Path(os.getenv("UPLOADS_DIR", str(ROOT_DIR / "uploads")))


def output_dir() -> Path:
    return Path(os.getenv("OUTPUT_DIR", str(ROOT_DIR / "output")))


def ai_provider_name() -> Optional[str]:
    """
    Provider IA explicite ("openai" | "anthropic" | "none").
    None → premier provider dont la clé API est présente.
    """
    value = os.getenv("AI_PROVIDER", "").strip().lower()
    return value or None


def ai_api_key(provider: str) -> Optional[str]:
    return os.getenv(f"{provider.upper()}_API_KEY") or None


def ai_model(provider: str) -> str:
    return os.getenv(f"{provider.upper()}_MODEL", _DEFAULT_MODELS.get(provider, ""))


def ai_temperature() -> float:
    try:
        return float(os.getenv("AI_TEMPERATURE", "0.7"))
    except ValueError:
        return 0.7
