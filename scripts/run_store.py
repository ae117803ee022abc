from __future__ import annotations

import os

from hrm_system.store.server import create_store_app


def main() -> None:
    app = create_store_app()
    app.run(host=os.getenv("STORE_HOST", "127.0.0.1"), port=int(os.getenv("STORE_PORT", "5001")))


if __name__ == "__main__":
    main()
