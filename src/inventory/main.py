"""CLI entry point for the warehouse reorder engine.

Usage:
    python -m src.inventory.main seed
    python -m src.inventory.main products
    python -m src.inventory.main report --output data/exports/report.csv
    python -m src.inventory.main report --format json
    python -m src.inventory.main recommend --product-id PROD003
    python -m src.inventory.main simulate --product-id PROD003 --multiplier 2 --duration-days 7
    python -m src.inventory.main update-stock --product-id PROD003 --new-stock 10 --reason "Sold 15"
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from ..common.config import settings
from ..common.database import ProductStore
from ..common.logging import setup_logging
from .exporter import ReportExporter
from .seed import seed_database
from .service import InvalidRequestError, InventoryService, ProductNotFoundError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Warehouse Reorder Engine")
    parser.add_argument(
        "--db",
        type=str,
        help="SQLite database path (default: settings database.db_path)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("seed", help="Replace stored products with the sample set")
    sub.add_parser("products", help="List stored products")

    report = sub.add_parser("report", help="Generate the reorder report")
    report.add_argument("--output", type=str, help="Output file path")
    report.add_argument(
        "--format",
        choices=["csv", "json"],
        default="csv",
        help="Export format (default: csv)",
    )

    recommend = sub.add_parser("recommend", help="Reorder recommendation for one product")
    recommend.add_argument("--product-id", type=str, required=True)

    simulate = sub.add_parser("simulate", help="Simulate a demand spike for one product")
    simulate.add_argument("--product-id", type=str, required=True)
    simulate.add_argument("--multiplier", type=float, required=True, help="e.g. 2 for double sales")
    simulate.add_argument("--duration-days", type=int, required=True)

    update = sub.add_parser("update-stock", help="Set a product's on-hand stock")
    update.add_argument("--product-id", type=str, required=True)
    update.add_argument("--new-stock", type=int, required=True)
    update.add_argument("--reason", type=str, help="Note appended to the confirmation")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(settings.logging.level)
    service = InventoryService(ProductStore(args.db))

    try:
        if args.command == "seed":
            count = seed_database(service.store)
            logger.info("Database seeded with %d products", count)

        elif args.command == "products":
            for product in service.list_products():
                logger.info(
                    "  %s %s: stock=%d, avg daily sales=%.2f, lead time=%dd, %s",
                    product.product_id,
                    product.name,
                    product.current_stock,
                    product.average_daily_sales,
                    product.supplier_lead_time,
                    product.criticality_level.value,
                )

        elif args.command == "report":
            report = service.generate_reorder_report()
            exporter = ReportExporter()
            if args.format == "json":
                path = exporter.to_json(report, args.output)
            else:
                path = exporter.to_csv(report, args.output)

            logger.info("=== Reorder Report ===")
            for rec in report.recommendations:
                logger.info(
                    "  [%s] %s (%s): %s days left, reorder=%s qty=%s cost=%.2f | %s",
                    rec.criticality_level.value,
                    rec.product_name,
                    rec.product_id,
                    rec.days_of_stock_remaining,
                    rec.needs_reorder,
                    rec.suggested_reorder_quantity,
                    rec.estimated_cost,
                    rec.reason,
                )
            logger.info("Output written to %s", path)

        elif args.command == "recommend":
            rec = service.get_recommendation(args.product_id)
            print(json.dumps(rec.to_dict(), ensure_ascii=False, indent=2))

        elif args.command == "simulate":
            rec = service.simulate_demand_spike(
                args.product_id, args.multiplier, args.duration_days
            )
            print(json.dumps(rec.to_dict(), ensure_ascii=False, indent=2))

        elif args.command == "update-stock":
            message = service.update_stock(args.product_id, args.new_stock, args.reason)
            logger.info(message)

    except InvalidRequestError as e:
        parser.error(str(e))
    except ProductNotFoundError as e:
        logger.error("%s", e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
