#!/usr/bin/env python3
"""Import a GeoJSON feature collection of cities into a running server.

Usage:
    import_geojson.py FILE [--url https://localhost:8443] [--batch-size 1000] [--insecure]

Large files are sent in batches; each batch is imported all-or-nothing.
"""

import argparse
import json
import sys

import requests as req


def batches(features: list, size: int):
    for start in range(0, len(features), size):
        yield features[start : start + size]


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("file")
    parser.add_argument("--url", default="https://localhost:8443")
    parser.add_argument("--batch-size", type=int, default=1000)
    parser.add_argument("--insecure", action="store_true", help="Skip TLS verification")
    args = parser.parse_args()

    with open(args.file, encoding="utf-8") as f:
        features = json.load(f).get("features", [])

    print(f"Importing {len(features)} features from {args.file}")

    imported = 0
    for batch in batches(features, args.batch_size):
        response = req.post(
            f"{args.url.rstrip('/')}/import",
            json={"type": "FeatureCollection", "features": batch},
            verify=not args.insecure,
            timeout=60,
        )
        if response.status_code != 201:
            print(f"ERROR: batch starting at feature {imported} failed ({response.status_code}): {response.text}")
            sys.exit(1)
        imported += response.json()["imported"]
        print(f"  {imported}/{len(features)}")

    print(f"\n✅ Imported {imported} cities")


if __name__ == "__main__":
    main()
