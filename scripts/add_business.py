#!/usr/bin/env python3
"""CLI script to register a business directly in the data file.

Usage:
    uv run python scripts/add_business.py "Acme" "Widgets" a@acme.com product
    uv run python scripts/add_business.py "Fixit" "Repairs" f@fix.it service \
        --phone 555-0100 --address "1 Main St"
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add src to path so we can import modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.config import Settings
from src.modules.businesses import (
    BusinessCreate,
    BusinessService,
    InvalidCategoryError,
    JsonFileStore,
    MissingFieldError,
    PersistenceError,
)


async def add_business(data: BusinessCreate, data_file: Path) -> None:
    """Register a business in the directory.

    Args:
        data: Registration fields.
        data_file: JSON file holding the directory.
    """
    service = BusinessService(JsonFileStore(data_file))

    try:
        business = await service.create(data)
    except (MissingFieldError, InvalidCategoryError, PersistenceError) as e:
        print(f"✗ Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"✓ Registered {business.category.value}: {business.name}")
    print(f"  Business ID: {business.id}")
    print(f"  Created at: {business.created_at}")


def main() -> None:
    """Parse arguments and register the business."""
    settings = Settings()

    parser = argparse.ArgumentParser(description="Register a business")
    parser.add_argument("name", help="Business name")
    parser.add_argument("description", help="Short description")
    parser.add_argument("email", help="Contact email")
    parser.add_argument("category", help="product or service")
    parser.add_argument("--phone", default="", help="Contact phone")
    parser.add_argument("--address", default="", help="Street address")
    parser.add_argument(
        "--data-file",
        type=Path,
        default=settings.data_file,
        help=f"Directory JSON file (default: {settings.data_file})",
    )

    args = parser.parse_args()

    data = BusinessCreate(
        name=args.name,
        description=args.description,
        email=args.email,
        phone=args.phone,
        address=args.address,
        category=args.category,
    )
    asyncio.run(add_business(data, args.data_file))


if __name__ == "__main__":
    main()
