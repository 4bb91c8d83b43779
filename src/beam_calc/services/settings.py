from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

from beam_calc.sections.section_model import SectionModel

SETTINGS_ENV = "BEAM_CALC_SETTINGS"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    """
    Configuración de proceso. Se carga una vez al arrancar y no se modifica.

    Ejemplo de archivo JSON:
      {
        "section": {"E": 200e9, "I": 6.6667e-5, "S": 6.6667e-4},
        "allow_negative_load": true,
        "profile_points": 101,
        "log_dir": "logs"
      }
    """
    section: SectionModel = field(default_factory=SectionModel)
    allow_negative_load: bool = True
    profile_points: int = 101
    log_dir: str = "logs"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        if not isinstance(data, dict):
            raise ValueError("Configuración inválida: se esperaba un objeto JSON.")

        kwargs: Dict[str, Any] = {}
        if "section" in data:
            sec = data["section"]
            if not isinstance(sec, dict):
                raise ValueError("Configuración inválida: 'section' debe ser un objeto {E, I, S}.")
            kwargs["section"] = SectionModel.from_mapping(sec)

        if "allow_negative_load" in data:
            flag = data["allow_negative_load"]
            if not isinstance(flag, bool):
                raise ValueError(f"Configuración inválida: allow_negative_load={flag!r} (true/false).")
            kwargs["allow_negative_load"] = flag

        if "profile_points" in data:
            n = int(data["profile_points"])
            if n < 2:
                raise ValueError(f"Configuración inválida: profile_points={n} (mínimo 2).")
            kwargs["profile_points"] = n

        if "log_dir" in data:
            kwargs["log_dir"] = str(data["log_dir"])

        settings = cls(**kwargs)
        settings.section.check()
        return settings


def load_settings(path: Optional[str | Path] = None) -> Settings:
    """
    Lee la configuración desde `path` (o $BEAM_CALC_SETTINGS).
    Sin archivo => valores por defecto. Archivo roto => excepción (fatal al arrancar).
    """
    if path is None:
        path = os.environ.get(SETTINGS_ENV) or None
    if path is None:
        return Settings()

    p = Path(path)
    if not p.exists():
        logger.warning("No existe el archivo de configuración %s; se usan valores por defecto.", p)
        return Settings()

    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Archivo de configuración inválido ({p}): {e}") from e

    settings = Settings.from_dict(data)
    logger.info("Configuración cargada desde %s: sección=%s", p, settings.section.as_dict())
    return settings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
