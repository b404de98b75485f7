from __future__ import annotations

import dataclasses as dc
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Literal, Optional

LogFormat = Literal["json", "console"]


@dc.dataclass(frozen=True)
class Settings:
    output_suffix: str = "-collated"
    log_format: LogFormat = "json"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env
        fmt = (env.get("COLLATE_LOG_FORMAT") or "json").strip().lower()
        if fmt not in ("json", "console"):
            fmt = "json"
        return cls(
            output_suffix=env.get("COLLATE_OUTPUT_SUFFIX") or cls.output_suffix,
            log_format=fmt,  # type: ignore[arg-type]
        )

    def default_output(self, front: Path) -> Path:
        return front.with_name(f"{front.stem}{self.output_suffix}{front.suffix or '.pdf'}")
