#!/usr/bin/env python3
"""
Database migration and terminal setup script
"""
import os
import sys
import argparse
import logging
from pathlib import Path

# Add src to path
sys.path.append(str(Path(__file__).parent.parent / 'src'))

from alembic.config import Config
from alembic import command
from config import settings
from database import transaction
from services.configuration_service import ConfigurationService

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger("migrate")


def alembic_config() -> Config:
    alembic_cfg = Config("alembic.ini")
    alembic_cfg.set_main_option("sqlalchemy.url", os.getenv('DATABASE_URL', settings.DATABASE_URL))
    return alembic_cfg


def run_migrations(target='head', sql=False, tag=None):
    """Run database migrations"""
    try:
        command.upgrade(alembic_config(), target, sql=sql, tag=tag)
        logger.info(f"Migrations applied successfully to {target}")
        return True
    except Exception as e:
        logger.error(f"Migration failed: {e}")
        return False


def check_status():
    """Check migration status"""
    from alembic.script import ScriptDirectory

    alembic_cfg = alembic_config()
    script = ScriptDirectory.from_config(alembic_cfg)

    logger.info(f"Current head revision: {script.get_current_head()}")
    command.current(alembic_cfg, verbose=True)


def configure_terminal(code, model, merchant_code):
    """Register the POS terminal used for gateway payloads"""
    with transaction() as db:
        ConfigurationService.register(db, code=code, model=model, merchant_code=merchant_code)
    logger.info(f"Terminal {code}/{model} is now active for merchant {merchant_code}")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Database migration manager")
    subparsers = parser.add_subparsers(dest='command', help='Command to execute')

    upgrade_parser = subparsers.add_parser('upgrade', help='Upgrade database')
    upgrade_parser.add_argument('target', nargs='?', default='head', help='Target revision')
    upgrade_parser.add_argument('--sql', action='store_true', help='Generate SQL only')
    upgrade_parser.add_argument('--tag', help='Tag to apply')

    downgrade_parser = subparsers.add_parser('downgrade', help='Downgrade database')
    downgrade_parser.add_argument('target', help='Target revision')
    downgrade_parser.add_argument('--sql', action='store_true', help='Generate SQL only')

    subparsers.add_parser('status', help='Check migration status')
    subparsers.add_parser('history', help='Show migration history')

    configure_parser = subparsers.add_parser('configure', help='Register the active POS terminal')
    configure_parser.add_argument('code', help='Terminal code')
    configure_parser.add_argument('model', help='Terminal model')
    configure_parser.add_argument('merchant_code', help='Merchant the terminal is registered to')

    args = parser.parse_args(argv)

    if args.command == 'upgrade':
        return run_migrations(args.target, args.sql, args.tag)
    elif args.command == 'downgrade':
        command.downgrade(alembic_config(), args.target, sql=args.sql)
    elif args.command == 'status':
        check_status()
    elif args.command == 'history':
        command.history(alembic_config(), verbose=True)
    elif args.command == 'configure':
        configure_terminal(args.code, args.model, args.merchant_code)
    else:
        parser.print_help()
    return True


if __name__ == '__main__':
    sys.exit(0 if main() else 1)
