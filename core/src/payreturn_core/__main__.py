from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler

import uvicorn

from payreturn_core.app import create_app
from payreturn_core.config import load_core_config
from payreturn_core.home import ensure_payreturn_layout, resolve_payreturn_home


def main() -> None:
    home = resolve_payreturn_home()
    paths = ensure_payreturn_layout(home)
    config = load_core_config(paths)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            RotatingFileHandler(
                paths.log_file_path,
                maxBytes=config.logging.max_size_mb * 1024 * 1024,
                backupCount=config.logging.backup_count,
                encoding="utf-8",
            ),
            logging.StreamHandler(),
        ],
    )

    host = os.environ.get("PAYRETURN_BIND") or config.network.bind_host

    env_port = os.environ.get("PAYRETURN_PORT")
    port = int(env_port) if env_port else config.network.core_port

    uvicorn.run(create_app(), host=host, port=port)


if __name__ == "__main__":
    main()
