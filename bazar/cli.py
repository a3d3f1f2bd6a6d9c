# bazar/cli.py
import argparse
import sys

from bazar.data.database import SessionLocal, init_db
from bazar.services.cart_service import CartService
from bazar.services.chunk_sweeper import ChunkSweeper
from bazar.utils.logging import get_logger

logger = get_logger(__name__)


def clear_chunks(args) -> int:
    report = ChunkSweeper().sweep()

    print("File chunks are cleared!")
    print(f"Deleted {report.deleted} of {report.scanned} files ({report.failed} failed).")

    return 0


def clear_carts(args) -> int:
    db = SessionLocal()
    try:
        deleted = CartService(db).clear_expired_carts()
    finally:
        db.close()

    print(f"Expired carts are cleared! Deleted {deleted} carts.")

    return 0


def create_tables(args) -> int:
    init_db()
    print("Database tables created.")

    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bazar", description="Bazar maintenance commands")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("clear-chunks", help="Clear the file chunks").set_defaults(handler=clear_chunks)
    commands.add_parser("clear-carts", help="Clear the expired carts").set_defaults(handler=clear_carts)
    commands.add_parser("init-db", help="Create the database tables").set_defaults(handler=create_tables)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logger.info(f"Running command {args.command}")

    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
