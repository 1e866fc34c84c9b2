"""ecswipe CLI entry point."""
import argparse
import logging
import sys

from botocore.exceptions import BotoCoreError, ClientError

from ecswipe.client import ClientProvider
from ecswipe.cleaner import ECSCleaner
from ecswipe.core.config import load_config, load_credentials
from ecswipe.core.errors import ConfigError, EcsWipeError
from ecswipe.core.logging import setup_logging, get_run_id
from ecswipe.operations import OPERATIONS, parse_operation


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description='ecswipe - tear down ECS clusters and task definitions')
    parser.add_argument('--operation', '-o', choices=list(OPERATIONS),
                        help='What to tear down, and whether in the default region '
                             'or every region of the regions file (default: delete-clusters)')
    parser.add_argument('--config', '-c', help='Path to YAML config file')
    parser.add_argument('--region', help='Region for single-region operations '
                                         '(default: AWS_REGION)')
    parser.add_argument('--regions-file', help='Region list for *-all-regions operations')
    parser.add_argument('--env-file', help='dotenv file with AWS credentials (default: .env)')
    parser.add_argument('--dry-run', action='store_true',
                        help='List what would be removed without deleting anything')
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help='Verbosity: -v=INFO (default), -vv=DEBUG')
    parser.add_argument('-q', '--quiet', action='store_true',
                        help='Only log warnings and errors')
    parser.add_argument('--json-logs', action='store_true',
                        help='Output logs in JSON format')
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigError as e:
        logging.error(str(e))
        return 1

    # CLI args override config
    if args.operation:
        config.operation = args.operation
    if args.region:
        config.region = args.region
    if args.regions_file:
        config.regions_file = args.regions_file
    if args.env_file:
        config.env_file = args.env_file
    if args.dry_run:
        config.dry_run = True
    if args.verbose:
        config.verbosity = args.verbose
    if args.quiet:
        config.verbosity = 0
    if args.json_logs:
        config.json_logs = True

    setup_logging(config.verbosity, config.json_logs)
    logging.info(f"ecswipe run_id={get_run_id()} operation={config.operation} "
                 f"dry_run={config.dry_run}")

    try:
        operation = parse_operation(config.operation)
        credentials = load_credentials(config.env_file)
        cleaner = ECSCleaner(config, ClientProvider(credentials))
        if not config.dry_run:
            logging.warning("LIVE RUN MODE - Resources WILL be deleted")
        failed_regions = cleaner.run(operation, config.region)
    except EcsWipeError as e:
        logging.error(f"Aborting: {e}")
        return 1
    except (ClientError, BotoCoreError) as e:
        logging.error(f"Pipeline failed: {e}")
        return 1
    except KeyboardInterrupt:
        logging.warning("Cancelled by user")
        return 130

    if failed_regions:
        logging.error(f"Failed regions: {', '.join(failed_regions)}")
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
