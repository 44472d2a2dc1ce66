"""
Data Verification Script

Verifies integrity of the JSON data files.
Run from project root: python scripts/verify.py
"""

import json
import os
import sys
from datetime import datetime

import pandas as pd
from filelock import FileLock, Timeout

DATA_DIR = os.environ.get("DATA_DIRECTORY", "data")
ORDERS_FILE = os.path.join(DATA_DIR, "orders.json")
INVENTORY_FILE = os.path.join(DATA_DIR, "inventory.json")
LOCK_TIMEOUT = float(os.environ.get("FILE_LOCK_TIMEOUT", "10"))


def load_frame(path: str) -> pd.DataFrame | None:
    """Load a JSON array file into a DataFrame, or None if unusable."""
    if not os.path.exists(path):
        print(f"\n❌ {path} not found!")
        print("   Start the server once to create it.")
        return None

    try:
        with FileLock(path + ".lock", timeout=LOCK_TIMEOUT), open(path, encoding="utf-8") as f:
            records = json.load(f)
    except Timeout:
        print(f"\n❌ Lock timeout ({LOCK_TIMEOUT}s) reading {path}")
        return None
    except (OSError, ValueError, RecursionError) as e:
        print(f"\n❌ Could not read {path}: {e}")
        return None

    if not isinstance(records, list):
        print(f"\n❌ {path} does not hold a JSON array")
        return None

    print(f"\n✅ {path} loaded ({len(records)} records)")
    return pd.DataFrame.from_records(records)


def check_ids(df: pd.DataFrame, label: str) -> bool:
    """Report missing and duplicate IDs."""
    if df.empty:
        return True
    if "id" not in df.columns:
        print(f"⚠️ {label}: no id column")
        return False

    duplicates = df["id"].duplicated().sum()
    if duplicates > 0:
        print(f"⚠️ {label}: {duplicates} duplicate IDs found!")
        return False

    print(f"✅ {label}: no duplicate IDs (next id {int(df['id'].max()) + 1})")
    return True


def verify_data() -> bool:
    """Verify data files after a simulation or a service."""

    print("=" * 60)
    print("🔍 DATA VERIFICATION REPORT")
    print("=" * 60)
    print(f"⏰ Timestamp: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    print(f"📂 Directory: {DATA_DIR}")
    print("=" * 60)

    ok = True

    orders = load_frame(ORDERS_FILE)
    if orders is None:
        ok = False
    else:
        ok = check_ids(orders, "Orders") and ok
        if not orders.empty:
            paid = orders["paid"].fillna(False).astype(bool) if "paid" in orders.columns else pd.Series(dtype=bool)
            print(f"\n📊 ORDERS:")
            print(f"   Total: {len(orders)}")
            print(f"   Paid: {int(paid.sum())}")
            print(f"   Unpaid: {len(orders) - int(paid.sum())}")
            if "status" in orders.columns:
                print("   By status:")
                for status, count in orders["status"].value_counts(dropna=False).items():
                    print(f"      {status}: {count}")
            if "covers" in orders.columns:
                covers = pd.to_numeric(orders["covers"], errors="coerce").fillna(0)
                print(f"   Covers served: {int(covers.sum())}")

    inventory = load_frame(INVENTORY_FILE)
    if inventory is None:
        ok = False
    else:
        ok = check_ids(inventory, "Inventory") and ok
        if not inventory.empty and "quantity" in inventory.columns:
            negative = inventory[pd.to_numeric(inventory["quantity"], errors="coerce") < 0]
            print(f"\n📦 INVENTORY:")
            print(f"   Items: {len(inventory)}")
            if negative.empty:
                print("   ✅ No negative stock")
            else:
                print(f"   ⚠️ Negative stock on {len(negative)} item(s):")
                cols = [c for c in ["id", "name", "quantity", "unit"] if c in negative.columns]
                print(negative[cols].to_string(index=False))

    print("\n" + "=" * 60)
    print("✅ VERIFICATION COMPLETE" if ok else "⚠️ VERIFICATION FOUND PROBLEMS")
    print("=" * 60)

    return ok


if __name__ == "__main__":
    sys.exit(0 if verify_data() else 1)
