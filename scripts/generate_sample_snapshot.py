#!/usr/bin/env python3
"""
Generate a sample snapshot for the finance tracker.

Writes six months of transactions ending in the current month, plus budgets
for the current month, to a JSON file that can be loaded with:

    finance-tracker-mcp --no-default-categories --data-file sample_snapshot.json
"""

import argparse
import json
from datetime import date
from pathlib import Path

from finance_tracker_mcp.core.seed import DEFAULT_CATEGORIES
from finance_tracker_mcp.utils.date_utils import shift_month

# Destination: repository root
DEST_PATH = Path(__file__).parent.parent / "sample_snapshot.json"

# (day, description, amount, category, type) repeated every month
MONTHLY_ENTRIES = [
    (1, "Monthly Salary", 5200, "Salary", "income"),
    (15, "Freelance Web Design", 1200, "Business", "income"),
    (1, "Monthly Rent", 1800, "Housing", "expense"),
    (3, "Electricity Bill", 145, "Housing", "expense"),
    (5, "Internet Bill", 75, "Housing", "expense"),
    (6, "Whole Foods Groceries", 125.5, "Food & Dining", "expense"),
    (12, "Restaurant Dinner", 86.4, "Food & Dining", "expense"),
    (20, "Farmers Market", 54.25, "Food & Dining", "expense"),
    (7, "Gas Station", 62, "Transportation", "expense"),
    (18, "Metro Card", 45, "Transportation", "expense"),
    (9, "Movie Tickets", 32, "Entertainment", "expense"),
    (14, "Online Shopping", 149.99, "Shopping", "expense"),
    (22, "Pharmacy", 38.75, "Healthcare", "expense"),
]

# Expenses grow a little every month so trends and forecasts have a slope.
MONTHLY_GROWTH = 0.03

BUDGETS = {
    "Food & Dining": 300,
    "Transportation": 150,
    "Housing": 2100,
    "Entertainment": 60,
    "Shopping": 200,
    "Healthcare": 100,
}


def category_ref(name):
    return name.lower().replace(" & ", "-").replace(" ", "-")


def build_snapshot(today, months=6):
    """Build the snapshot document for the months ending with today's."""
    categories = [
        dict(category.model_dump(), ref=category_ref(category.name))
        for category in DEFAULT_CATEGORIES
    ]

    transactions = []
    for index in range(months):
        year, month = shift_month(today.year, today.month, index - months + 1)
        factor = 1 + MONTHLY_GROWTH * index
        for day, description, amount, category, entry_type in MONTHLY_ENTRIES:
            entry_date = date(year, month, day)
            if entry_date > today:
                continue
            if entry_type == "expense":
                amount = round(amount * factor, 2)
            transactions.append(
                {
                    "description": description,
                    "amount": amount,
                    "category_id": category_ref(category),
                    "date": entry_date.isoformat(),
                    "type": entry_type,
                }
            )

    budgets = [
        {
            "category_id": category_ref(category),
            "amount": amount,
            "month": today.month,
            "year": today.year,
        }
        for category, amount in BUDGETS.items()
    ]

    return {"categories": categories, "transactions": transactions, "budgets": budgets}


def main():
    parser = argparse.ArgumentParser(description="Generate a sample finance tracker snapshot")
    parser.add_argument(
        "--output", type=Path, default=DEST_PATH, help="Where to write the snapshot"
    )
    parser.add_argument("--months", type=int, default=6, help="Number of months of history")
    args = parser.parse_args()

    snapshot = build_snapshot(date.today(), months=args.months)
    args.output.write_text(json.dumps(snapshot, indent=2), encoding="utf-8")

    print(f"Wrote {len(snapshot['transactions'])} transactions to {args.output}")


if __name__ == "__main__":
    main()
