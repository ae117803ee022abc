from __future__ import annotations

import argparse
import importlib

from config import get_settings_module

from hrm_system.state.codec import to_document
from hrm_system.state.seed import initial_state
from hrm_system.store.server import build_repository
from hrm_system.store.service import StoreService


def main() -> None:
    parser = argparse.ArgumentParser(description="Write the demo HRM document into the store.")
    parser.add_argument("--force", action="store_true", help="overwrite an existing document")
    args = parser.parse_args()

    settings = importlib.import_module(get_settings_module())
    store = StoreService(build_repository(settings))
    document = to_document(initial_state())

    if args.force:
        store.reset(document)
        print("OK: Store reset to demo data")
    elif store.init(document):
        print("OK: Seeded store with demo data")
    else:
        print("SKIP: Store already holds data (use --force to overwrite)")


if __name__ == "__main__":
    main()
