from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class PayReturnPaths:
    home: Path
    logs_dir: Path
    config_dir: Path

    @property
    def core_config_path(self) -> Path:
        return self.config_dir / "core.json"

    @property
    def log_file_path(self) -> Path:
        return self.logs_dir / "core.log"


def resolve_payreturn_home(environ: dict[str, str] | None = None) -> Path:
    env = os.environ if environ is None else environ

    raw = (env.get("PAYRETURN_HOME") or "").strip()
    if raw:
        candidate = Path(raw).expanduser()
        # Relative values are anchored at the user's home, never the CWD of the server process.
        if not candidate.is_absolute():
            candidate = (Path.home() / candidate).resolve()
        else:
            candidate = candidate.resolve()
        return candidate

    # Server deployments are POSIX; follow the XDG data dir convention.
    xdg = (env.get("XDG_DATA_HOME") or "").strip()
    if xdg:
        return (Path(xdg) / "payreturn").resolve()
    return (Path.home() / ".local" / "share" / "payreturn").resolve()


def ensure_payreturn_layout(home: Path) -> PayReturnPaths:
    home.mkdir(parents=True, exist_ok=True)

    logs_dir = home / "logs"
    config_dir = home / "config"

    for path in (logs_dir, config_dir):
        path.mkdir(parents=True, exist_ok=True)

    return PayReturnPaths(home=home, logs_dir=logs_dir, config_dir=config_dir)
