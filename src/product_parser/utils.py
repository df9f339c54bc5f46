from __future__ import annotations

import logging
import os
from dataclasses import dataclass, asdict, field
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError, field_validator

load_dotenv()

# parser name -> package extra that installs it
_HTML_PARSERS = {"html.parser": None, "lxml": "lxml", "html5lib": "html5lib"}


class Settings(BaseModel):
    debug: bool = False
    html_parser: str = "html.parser"

    model_config = {
        "extra": "ignore"
    }

    @field_validator("html_parser")
    @classmethod
    def _known_parser(cls, value: str) -> str:
        if value not in _HTML_PARSERS:
            choices = ", ".join(
                name if extra is None else f"{name} (install product-parser[{extra}])"
                for name, extra in _HTML_PARSERS.items()
            )
            raise ValueError(f"unsupported HTML parser {value!r}; choose one of: {choices}")
        return value


def _parse_bool(value: Optional[str], default: bool) -> bool:
    if value is None:
        return default
    lowered = value.strip().lower()
    if lowered in {"1", "true", "yes", "on"}:
        return True
    if lowered in {"0", "false", "no", "off"}:
        return False
    return default


def load_settings() -> Settings:
    raw = {
        "debug": _parse_bool(os.getenv("PRODUCT_PARSER_DEBUG"), False),
        "html_parser": os.getenv("PRODUCT_PARSER_HTML_PARSER") or "html.parser",
    }

    try:
        return Settings(**raw)
    except ValidationError as exc:
        raise RuntimeError(f"Invalid configuration: {exc}") from exc


@dataclass(frozen=True)
class ProductRecord:
    title: Optional[str] = None
    description: Optional[str] = None
    brand: Optional[str] = None
    price: Optional[str] = None
    currency: Optional[str] = None
    images: List[str] = field(default_factory=list)

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


def configure_logging(debug: bool) -> None:
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
