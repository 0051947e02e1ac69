from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.site_ledger.site_ledger.container import build_container


def main() -> None:
    parser = argparse.ArgumentParser(description="Rebuild the daily expense summaries of one or all projects.")
    parser.add_argument("project_id", nargs="?", type=int, help="project to rebuild (default: every project)")
    args = parser.parse_args()

    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=dict(settings.DB_CONFIG))

    if args.project_id is not None:
        project_ids = [args.project_id]
    else:
        project_ids = [p.project_id for p in container.project_service.list_projects()]

    for project_id in project_ids:
        rebuilt = container.summary_service.recalculate_all(project_id)
        closing = rebuilt[-1].remaining_balance if rebuilt else "0.00"
        print(f"OK: project {project_id} -> {len(rebuilt)} days, balance {closing}")


if __name__ == "__main__":
    main()
