"""
aws-bill-audit - estimated monthly bill per EC2, RDS and ElastiCache resource.

Read-only: lists resources, reads CloudWatch and the Price List API, and
prints a table. Credentials come from AWS_ACCESS_KEY_ID and
AWS_ACCESS_SECRET_KEY (or AWS_SECRET_ACCESS_KEY). Region is ap-south-1.

Usage:
    aws-bill-audit                  # prompts for services
    aws-bill-audit --services 1,3   # EC2 and ElastiCache only
    aws-bill-audit --plain          # ASCII grid instead of the rich table
"""

import argparse
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.prompt import Prompt

from aws_bill_audit.auditor import BillAuditor, parse_selection
from aws_bill_audit.clients import AwsClients
from aws_bill_audit.config import AuditConfig

log = logging.getLogger("aws_bill_audit")

console = Console()


def get_user_input() -> List[str]:
    console.print("Enter the numbers corresponding to the services you want to audit, "
                  "separated by commas (e.g., 1,2,3):")
    console.print("1 for EC2")
    console.print("2 for RDS")
    console.print("3 for ElastiCache")
    console.print("Leave empty for all services")
    return parse_selection(Prompt.ask("Services", default="", show_default=False, console=console))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="aws-bill-audit",
                                     description="Estimate this month's AWS bill per resource.")
    parser.add_argument("--services", help="comma separated: 1=EC2, 2=RDS, 3=ElastiCache (default: prompt)")
    parser.add_argument("--workers", type=int, default=1,
                        help="parallel metric/price lookups per category (default: 1)")
    parser.add_argument("--plain", action="store_true", help="print an ASCII grid instead of a rich table")
    parser.add_argument("--verbose", "-v", action="store_true", help="debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(asctime)s %(levelname)s %(message)s', stream=sys.stderr)
    if args.workers < 1:
        console.print("[red]--workers must be at least 1[/red]")
        sys.exit(2)

    try:
        config = AuditConfig.from_env()
        services = parse_selection(args.services) if args.services is not None else get_user_input()
        log.info("Auditing services %s in %s", services or "all", config.region)
        auditor = BillAuditor(AwsClients(config), console=console, workers=args.workers)
        auditor.audit(services, plain=args.plain)
    except KeyboardInterrupt:
        console.print("\n[red]Interrupted by user[/red]")
        sys.exit(1)
    except Exception as e:
        log.exception("Audit failed: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
