"""
Load rate cards from a CSV file.

Usage:
    python scripts/load_rate_cards.py -i rates.csv [-s SHIPPER_ID] [-f]

Columns: weight (pounds), cost, zone, effectiveAt, expiresAt. Without a
shipper the rows become the default rate card.
"""

import argparse
import sys
import os

# Add parent directory to path to import modules
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from utils.reference_data import upload_rate_cards


def main():
    parser = argparse.ArgumentParser(description="Load rate card from csv")
    parser.add_argument("-i", "--input", required=True, help="The path to the input CSV.")
    parser.add_argument(
        "-s",
        "--shipper",
        type=int,
        default=None,
        help="the shipper id of the customer that these rates apply to",
    )
    parser.add_argument(
        "-f",
        "--flat",
        action="store_true",
        help="the rate card is zoneless (flat rate)",
    )
    args = parser.parse_args()

    try:
        print(f"Reading CSV file: {args.input}")
        print("-" * 50)

        result = upload_rate_cards(args.input, shipper_id=args.shipper, flat=args.flat)

        print(f"Rows in file: {result['total_rows_in_file']}")
        print(f"Inserted: {result['inserted']}")

    except Exception as e:
        print(f"\nERROR: {str(e)}")
        sys.exit(1)


if __name__ == "__main__":
    main()
