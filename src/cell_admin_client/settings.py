from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Literal, Mapping, Optional

LogFormat = Literal["json", "text"]

_TRUE = {"1", "true", "yes", "on"}


@dataclass
class ClientSettings:
    """
    Centralized configuration for CellAdminClient.

    Pass an instance to CellAdminClient(settings=...) to apply defaults.
    Explicit keyword args to CellAdminClient(...) override these.
    """

    # --- Connection / auth ---
    base_url: str = ""
    username: Optional[str] = None
    password: Optional[str] = None
    token: Optional[str] = None  # access token, "Bearer ..." or raw JWT
    refresh_token: Optional[str] = None

    # --- HTTP behavior ---
    default_page_size: int = 20
    timeout: float = 30.0
    retries: int = 3
    verify_ssl: bool = True

    # --- Logging ---
    log_level: str = "WARNING"
    log_format: LogFormat = "json"
    log_destination: str | None = None
    # None or "stderr" -> stderr, "stdout" -> stdout, any other string -> file path.

    @classmethod
    def from_env(
        cls, prefix: str = "CELL_ADMIN_", environ: Mapping[str, str] | None = None
    ) -> "ClientSettings":
        """
        Build settings from environment variables, e.g. CELL_ADMIN_BASE_URL,
        CELL_ADMIN_TOKEN, CELL_ADMIN_DEFAULT_PAGE_SIZE, CELL_ADMIN_VERIFY_SSL.
        Unset variables keep the dataclass defaults.
        """
        env = os.environ if environ is None else environ
        kwargs = {}
        for f in fields(cls):
            raw = env.get(prefix + f.name.upper())
            if raw is None or raw == "":
                continue
            default = f.default
            if isinstance(default, bool):
                kwargs[f.name] = raw.strip().lower() in _TRUE
            elif isinstance(default, int):
                kwargs[f.name] = int(raw)
            elif isinstance(default, float):
                kwargs[f.name] = float(raw)
            else:
                kwargs[f.name] = raw
        return cls(**kwargs)
