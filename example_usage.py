#!/usr/bin/env python3
"""
Basic usage examples for the Sangfor AC client library.

Usage:
    python example_usage.py <host[:port]> <secret>
"""

import logging
import sys

from sangfor_ac import ACClient, ACClientError, RemoteError
from sangfor_ac.models import OnlineUserQuery, UserRankFilter


def main():
    """Run basic usage examples."""
    if len(sys.argv) != 3:
        print(__doc__)
        return 2

    target, secret = sys.argv[1], sys.argv[2]
    logging.basicConfig(level=logging.INFO)

    print("=== Sangfor AC Client Basic Usage Examples ===\n")

    with ACClient(target, secret) as client:
        print(f"Client created for: {client.base_url}")
        print(f"Secret: {secret[:4]}...\n")

        try:
            print("1. Appliance status...")
            print(f"   Version:   {client.get_version()}")
            print(f"   Time:      {client.get_sys_time()}")
            print(f"   CPU:       {client.get_cpu_usage()}%")
            print(f"   Memory:    {client.get_mem_usage()}%")
            print(f"   Disk:      {client.get_disk_usage()}%")
            print(f"   Sessions:  {client.get_session_num()}")
            print()

            print("2. Built-in libraries...")
            for lib in client.get_inside_lib():
                state = "expired" if lib.is_expired else "valid"
                print(f"   {lib.name} ({lib.type}): {lib.current} [{state}]")
            print()

            print("3. Traffic...")
            throughput = client.get_throughput()
            print(f"   Recv {throughput.recv} / Send {throughput.send} {throughput.unit}")
            for rank in client.get_user_rank(UserRankFilter(top=5)):
                print(f"   #{rank.id} {rank.name} {rank.ip} total={rank.total}")
            print()

            print("4. Online users...")
            online = client.online_user_get(OnlineUserQuery(status="active"))
            print(f"   {online.count} online")
            for user in online.users[:10]:
                print(f"   {user.name} {user.ip} {user.mac}")
            print()

            print("5. Policies...")
            for policy in client.policy_net_get():
                print(f"   net:  {policy.policy_info.name}")
            for policy in client.policy_flux_get():
                print(f"   flux: {policy.name}")

        except RemoteError as e:
            print(f"   ✗ Appliance error {e.code}: {e.message}")
            return 1
        except ACClientError as e:
            print(f"   ✗ Request failed: {e}")
            return 1

    print("\n=== Examples completed ===")
    return 0


if __name__ == "__main__":
    sys.exit(main())
