"""
Load the zone matrix table from a packed zone matrix file.

Usage:
    python scripts/load_zone_matrix.py -i <path_to_matrix_file>

Each line holds a 3 digit origin prefix followed by the zone codes for every
destination prefix.
"""

import argparse
import sys
import os

# Add parent directory to path to import modules
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from utils.reference_data import upload_zone_matrix


def main():
    parser = argparse.ArgumentParser(description="Update zone_matrix table from file")
    parser.add_argument("-i", "--input", required=True, help="Path to zone matrix file")
    args = parser.parse_args()

    try:
        print(f"Reading zone matrix file: {args.input}")
        print("-" * 50)

        result = upload_zone_matrix(args.input)

        print(f"Prefixes in file: {result['total_prefixes_in_file']}")
        print(f"Inserted: {result['inserted']}")
        print(f"Updated: {result['updated']}")

    except Exception as e:
        print(f"\nERROR: {str(e)}")
        sys.exit(1)


if __name__ == "__main__":
    main()
