import argparse
import json
from pathlib import Path

from repricer.config import freeze_config, verify_config_lock


def main() -> None:
    parser = argparse.ArgumentParser(description="Validate a run config and write its hash lock file")
    parser.add_argument("config")
    parser.add_argument("--lock", default=None)
    args = parser.parse_args()

    path = Path(args.config)
    lock_path = freeze_config(path, args.lock)
    status = "ok" if verify_config_lock(path, lock_path) else "mismatch"
    lock = json.loads(lock_path.read_text(encoding="utf-8"))
    strategy = lock["strategy"]
    print(f"Frozen {path} -> {lock_path} ({status})")
    print(f"{strategy['name']} [{strategy['direction']}] limit {lock['limit_price']:.2f}")


if __name__ == "__main__":
    main()
