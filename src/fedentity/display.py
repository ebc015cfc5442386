#!/usr/bin/env python3
"""Fetches, verifies and prints the Entity Configuration of an entity."""
import argparse
import json

from fedentity.client import fetch_entity_configuration


def main():
    parser = argparse.ArgumentParser(prog="fedentity.display")
    parser.add_argument('-k', "--insecure", action='store_true')
    parser.add_argument('-t', "--tenant", action='store_true')
    parser.add_argument(dest="entity_id")
    args = parser.parse_args()

    if args.insecure:
        httpc_params = {"verify": False}
    else:
        httpc_params = {}

    entity_configuration = fetch_entity_configuration(args.entity_id,
                                                      httpc_params=httpc_params,
                                                      tenant=args.tenant)
    print(20 * "=" + f" Entity Configuration for {args.entity_id} " + 20 * "=")
    print(json.dumps(entity_configuration.to_dict(), indent=2))


if __name__ == '__main__':
    main()
