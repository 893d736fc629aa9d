#!/usr/bin/env python3
"""Benchmark permission checks: latency (p50, p95, p99), QPS and denial ratio.

Usage:
    export API_URL=http://localhost:8000/api
    python scripts/bench_check.py --user-id 7 --num-checks 500

Checks cycle through every (module, action) pair of the catalog returned by
GET /permissions/configuration.
"""
from __future__ import annotations

import argparse
import itertools
import os
import statistics
import sys
import time

import httpx


def main() -> int:
    parser = argparse.ArgumentParser(description="Benchmark permission checks")
    parser.add_argument("--user-id", type=int, required=True, help="User whose access is checked")
    parser.add_argument("--num-checks", type=int, default=200, help="Number of check requests")
    parser.add_argument("--output", type=str, default="", help="Optional summary file path")
    args = parser.parse_args()

    api_url = os.environ.get("API_URL", "http://localhost:8000/api").rstrip("/")

    with httpx.Client(timeout=30.0) as client:
        r = client.get(f"{api_url}/permissions/configuration")
        r.raise_for_status()
        catalog = r.json()["data"]
        pairs = itertools.cycle(itertools.product(catalog["modules"], catalog["actions"]))

        latencies: list[float] = []
        errors = 0
        denied = 0
        print(f"Running {args.num_checks} permission checks for user {args.user_id}...")
        start_total = time.perf_counter()
        for resource, action in itertools.islice(pairs, args.num_checks):
            t0 = time.perf_counter()
            r = client.post(
                f"{api_url}/permissions/check/{args.user_id}",
                json={"resource": resource, "action": action},
            )
            elapsed = time.perf_counter() - t0
            if r.status_code == 200:
                latencies.append(elapsed)
                if not r.json()["granted"]:
                    denied += 1
            else:
                errors += 1
        total_elapsed = time.perf_counter() - start_total

    n = len(latencies)
    if n == 0:
        print("No successful checks.")
        return 1

    qps = n / total_elapsed
    ordered = sorted(latencies)
    p50 = statistics.median(latencies) * 1000
    p95 = ordered[int(n * 0.95) - 1] * 1000 if n >= 20 else p50
    p99 = ordered[int(n * 0.99) - 1] * 1000 if n >= 100 else p95

    summary = (
        f"Permission check benchmark (user={args.user_id}, checks={n}, errors={errors})\n"
        f"  Denied: {denied} ({denied / n:.0%})\n"
        f"  QPS: {qps:.2f}\n"
        f"  Latency: p50={p50:.1f} ms, p95={p95:.1f} ms, p99={p99:.1f} ms\n"
        f"  Total time: {total_elapsed:.2f} s\n"
    )
    print(summary)

    if args.output:
        os.makedirs(os.path.dirname(args.output) or ".", exist_ok=True)
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(summary)
        print(f"Wrote {args.output}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
