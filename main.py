"""IdeaScout - business idea research

Simple CLI for running one research job.
"""

import argparse
import asyncio
import json

from ideascout.config import settings
from ideascout.services.job_manager import JobManager


async def watch_progress(manager: JobManager, job_id: str, interval: float = 1.0):
    last = -1
    while True:
        status = manager.get_status(job_id)
        if status is None or status.status in ("completed", "failed"):
            return
        if status.progress != last:
            print(f"  [{status.status}] {status.progress}%")
            last = status.progress
        await asyncio.sleep(interval)


async def run_research(keyword: str, location: str | None, budget: str | None) -> int:
    """Run one job on the given keyword and print the report."""
    manager = JobManager()
    job_id = manager.submit(keyword, location, budget)
    print(f"Job: {job_id}")
    print("-" * 50)

    watcher = asyncio.create_task(watch_progress(manager, job_id))
    status = await manager.wait_for(job_id)
    watcher.cancel()

    if status is None:
        print("[!] Job disappeared")
        return 1
    if status.status == "failed":
        print(f"\n[!] Error: {status.error}")
        return 1

    print(f"\n{'=' * 50}")
    print("REPORT:")
    print(f"{'=' * 50}")
    print(json.dumps(status.result.model_dump() if status.result else {}, indent=2, ensure_ascii=False))
    return 0


def main():
    parser = argparse.ArgumentParser(description="IdeaScout business idea research")
    parser.add_argument("--keyword", "-k", required=True, help="Market research keyword")
    parser.add_argument("--location", "-l", help=f"Target location (default: {settings.default_location})")
    parser.add_argument("--budget", "-b", help=f"Budget (default: {settings.default_budget})")

    args = parser.parse_args()

    raise SystemExit(asyncio.run(run_research(args.keyword, args.location, args.budget)))


if __name__ == "__main__":
    main()
