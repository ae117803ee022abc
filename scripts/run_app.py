from __future__ import annotations

import os

from hrm_system.main import create_app


def main() -> None:
    app = create_app()
    # The reloader would start a second sync poller in the child process.
    app.run(host=os.getenv("APP_HOST", "127.0.0.1"), port=int(os.getenv("APP_PORT", "5000")), use_reloader=False)


if __name__ == "__main__":
    main()
