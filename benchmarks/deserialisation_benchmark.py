#!/usr/bin/env python3
"""Benchmark decoding of a large faction/basic response."""

import argparse
import json
import statistics
import time
from decimal import Decimal

from torn_api.endpoints import faction
from torn_api.response import ApiResponse


def build_payload(member_count: int) -> dict:
    members = {
        str(1000000 + i): {
            "name": f"Player{i}",
            "level": 1 + i % 100,
            "days_in_faction": i % 2000,
            "position": "Member",
            "status": {
                "description": "Okay",
                "details": "",
                "state": "Okay",
                "color": "green",
                "until": 0,
            },
            "last_action": {
                "status": "Offline",
                "timestamp": 1700000000 + i,
                "relative": f"{i % 60} minutes ago",
            },
        }
        for i in range(member_count)
    }
    return {
        "ID": 40832,
        "name": "Benchmark Faction",
        "leader": 1000000,
        "respect": 1234567,
        "age": 2500,
        "capacity": member_count,
        "best_chain": 2500,
        "members": members,
    }


def run(member_count: int, rounds: int, use_decimal: bool) -> None:
    raw = json.dumps(build_payload(member_count))
    parse_kwargs = {'parse_float': Decimal} if use_decimal else {}

    timings = []
    for _ in range(rounds):
        start = time.perf_counter()
        response = faction.Response(ApiResponse.from_value(json.loads(raw, **parse_kwargs)))
        response.basic()
        timings.append(time.perf_counter() - start)

    print(f"members={member_count} rounds={rounds} decimal={use_decimal}")
    print(f"  mean   {statistics.mean(timings) * 1000:.2f} ms")
    print(f"  median {statistics.median(timings) * 1000:.2f} ms")
    print(f"  min    {min(timings) * 1000:.2f} ms")


def main():
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument('--members', type=int, default=100)
    parser.add_argument('--rounds', type=int, default=200)
    parser.add_argument('--decimal', action='store_true')
    args = parser.parse_args()
    run(args.members, args.rounds, args.decimal)


if __name__ == '__main__':
    main()
