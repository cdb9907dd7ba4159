"""
Command-line interface.

``email-finder lookup DOMAIN`` runs a single lookup and prints JSON.
``email-finder batch INPUT OUTPUT`` runs one lookup per spreadsheet row.
"""
import argparse
import json
import logging
import os
import sys
import time
from collections import Counter
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

from email_finder.config import Config, ConfigurationError, config
from email_finder.exceptions import EmailFinderError
from email_finder.models import LookupRequest
from email_finder.orchestrator import orchestrator

# Initialize logger
log = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)-20s | %(message)s"

SPREADSHEET_EXTENSIONS = (".xlsx", ".csv")
OUTPUT_COLUMNS = ["Domain", "Email", "Confidence", "Reason", "Sources"]


class CLIError(Exception):
    """Exception raised for CLI errors."""
    pass


def _cell(value: Any) -> Optional[str]:
    """Spreadsheet cell as a stripped string, None for blanks and NaN."""
    if value is None or pd.isna(value):
        return None
    text = str(value).strip()
    return text or None


class CLI:
    """Command-line interface for single and batch lookups."""

    def __init__(self):
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create command-line argument parser.

        Returns:
            Configured argument parser
        """
        parser = argparse.ArgumentParser(
            prog="email-finder",
            description="Find likely email addresses for a company domain",
            formatter_class=argparse.ArgumentDefaultsHelpFormatter
        )
        parser.add_argument(
            "-v", "--verbose",
            action="store_true",
            help="Enable verbose logging"
        )
        parser.add_argument(
            "--config",
            help="Path to custom .env configuration file"
        )

        sub = parser.add_subparsers(dest="command", required=True)

        single = sub.add_parser("lookup", help="Look up one domain")
        single.add_argument("domain", help="Company domain or website URL")
        single.add_argument("--first-name", help="First name of a person at the company")
        single.add_argument("--last-name", help="Last name of a person at the company")
        single.add_argument(
            "-k", "--keyword",
            dest="keywords",
            action="append",
            default=[],
            help="Team or department keyword (repeatable)"
        )
        single.add_argument("-o", "--output", help="Write JSON here instead of stdout")

        batch = sub.add_parser("batch", help="Look up every domain in a spreadsheet")
        batch.add_argument(
            "input_file",
            help="Input spreadsheet (.xlsx or .csv) with a 'Domain' column"
        )
        batch.add_argument("output_file", help="Output spreadsheet for results")

        return parser

    def setup_logging(self, verbose: bool) -> Optional[str]:
        """
        Set up logging configuration.

        Args:
            verbose: Whether to enable verbose logging

        Returns:
            Path to log file, or None when LOG_DIR is not set
        """
        level = logging.DEBUG if verbose else getattr(logging, config.log_level, logging.INFO)

        handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
        logfile = None
        if config.log_dir:
            os.makedirs(config.log_dir, exist_ok=True)
            logfile = os.path.join(
                config.log_dir, f"email_finder_{time.strftime('%Y%m%d_%H%M%S')}.log"
            )
            handlers.append(logging.FileHandler(logfile, encoding="utf-8"))

        logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers)

        # Set lower level for external libraries
        logging.getLogger("requests").setLevel(logging.WARNING)
        logging.getLogger("urllib3").setLevel(logging.WARNING)

        return logfile

    def validate_environment(self) -> bool:
        try:
            config.validate_or_raise()
            return True
        except ConfigurationError as e:
            log.error("Configuration error: %s", e)
            return False

    def validate_input_file(self, file_path: str) -> Tuple[bool, Optional[str]]:
        """
        Validate that the input file exists and has the required format.

        Returns:
            Tuple of (is_valid, error_message)
        """
        if not os.path.isfile(file_path):
            return False, f"Input file not found: {file_path}"

        if not file_path.lower().endswith(SPREADSHEET_EXTENSIONS):
            return False, f"Input file must be .xlsx or .csv: {file_path}"

        try:
            df = self.read_table(file_path)
        except Exception as e:
            return False, f"Error reading input file: {e}"

        if "Domain" not in df.columns:
            return False, f"Input file must have 'Domain' column: {file_path}"

        if len(df) == 0:
            return False, f"Input file has no data: {file_path}"

        return True, None

    def validate_output_file(self, file_path: str) -> Tuple[bool, Optional[str]]:
        """
        Validate that the output file can be written.

        Returns:
            Tuple of (is_valid, error_message)
        """
        if not file_path.lower().endswith(SPREADSHEET_EXTENSIONS):
            return False, f"Output file must be .xlsx or .csv: {file_path}"

        output_dir = os.path.dirname(file_path)
        if output_dir and not os.path.isdir(output_dir):
            return False, f"Output directory does not exist: {output_dir}"

        test_target = file_path if os.path.exists(file_path) else (output_dir or ".")
        if not os.access(test_target, os.W_OK):
            return False, f"Output path is not writable: {test_target}"

        return True, None

    @staticmethod
    def read_table(file_path: str) -> pd.DataFrame:
        if file_path.lower().endswith(".csv"):
            return pd.read_csv(file_path)
        return pd.read_excel(file_path)

    @staticmethod
    def write_table(df: pd.DataFrame, file_path: str) -> None:
        if file_path.lower().endswith(".csv"):
            df.to_csv(file_path, index=False)
        else:
            df.to_excel(file_path, index=False)

    @staticmethod
    def payload_from_row(row: Dict[str, Any]) -> Dict[str, Any]:
        """Map a spreadsheet row onto a lookup payload."""
        keywords = _cell(row.get("Keywords"))
        return {
            "domain": _cell(row.get("Domain")) or "",
            "firstName": _cell(row.get("First Name")),
            "lastName": _cell(row.get("Last Name")),
            "keywords": [k.strip() for k in keywords.split(",") if k.strip()] if keywords else [],
        }

    def run_lookup(self, args: argparse.Namespace) -> int:
        try:
            request = LookupRequest.from_payload({
                "domain": args.domain,
                "firstName": args.first_name,
                "lastName": args.last_name,
                "keywords": args.keywords,
            })
        except EmailFinderError as e:
            log.error("Invalid input: %s", e)
            return 1

        outcome = orchestrator.lookup(request)
        text = json.dumps(outcome.to_dict(), indent=2, ensure_ascii=False)

        if args.output:
            Path(args.output).write_text(text + "\n", encoding="utf-8")
            log.info("Saved lookup -> %s", args.output)
        else:
            sys.stdout.write(text + "\n")

        return 0 if outcome.success else 1

    def run_batch(self, args: argparse.Namespace) -> int:
        valid_input, input_error = self.validate_input_file(args.input_file)
        if not valid_input:
            log.error("Input validation failed: %s", input_error)
            return 1

        valid_output, output_error = self.validate_output_file(args.output_file)
        if not valid_output:
            log.error("Output validation failed: %s", output_error)
            return 1

        df = self.read_table(args.input_file)
        log.info("Loaded %d rows from %s", len(df), args.input_file)

        start_time = time.time()
        stats = Counter()
        all_rows: List[Dict[str, str]] = []

        for row in df.to_dict(orient="records"):
            payload = self.payload_from_row(row)
            stats["rows"] += 1
            outcome = orchestrator.lookup_payload(payload)

            if not outcome["success"]:
                stats["failed"] += 1
                all_rows.append({
                    "Domain": payload["domain"],
                    "Email": "",
                    "Confidence": "",
                    "Reason": outcome["message"],
                    "Sources": "",
                })
                continue

            stats["ok"] += 1
            for result in outcome["results"]:
                stats[result["confidence"]] += 1
                all_rows.append({
                    "Domain": outcome["domain"],
                    "Email": result["email"],
                    "Confidence": result["confidence"],
                    "Reason": result["reason"],
                    "Sources": "; ".join(s["url"] for s in result["sources"]),
                })

        df_out = pd.DataFrame(all_rows, columns=OUTPUT_COLUMNS)
        try:
            self.write_table(df_out, args.output_file)
        except Exception as e:
            log.error("Failed to save output file: %s", e)
            return 1

        elapsed = time.time() - start_time
        log.info(
            "\n+--------------------------------------------------+\n"
            "| RUN SUMMARY                                      |\n"
            "+--------------------------------------------------+\n"
            f"| Rows            : {stats['rows']:>3}\n"
            f"| Lookups ok      : {stats['ok']:>3}\n"
            f"| Lookups failed  : {stats['failed']:>3}\n"
            f"| High            : {stats['high']:>3}\n"
            f"| Medium          : {stats['medium']:>3}\n"
            f"| Low             : {stats['low']:>3}\n"
            f"| Runtime         : {elapsed:6.1f} s\n"
            "+--------------------------------------------------+"
        )
        log.info("Saved %d rows -> %s", len(df_out), args.output_file)
        return 0

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run the CLI with the given arguments.

        Args:
            args: Command-line arguments (defaults to sys.argv[1:])

        Returns:
            Exit code (0 for success, non-zero for failure)
        """
        parsed_args = self.parser.parse_args(args)

        if parsed_args.config:
            config.update_from_dict(Config(parsed_args.config).as_dict())

        logfile = self.setup_logging(parsed_args.verbose)
        if logfile:
            log.info("Verbose log -> %s", Path(logfile).resolve())

        if not self.validate_environment():
            return 1

        if parsed_args.command == "lookup":
            return self.run_lookup(parsed_args)
        if parsed_args.command == "batch":
            return self.run_batch(parsed_args)
        raise CLIError(f"Unknown command: {parsed_args.command}")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the email finder.

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    cli = CLI()

    try:
        return cli.run(argv)

    except KeyboardInterrupt:
        log.warning("Execution interrupted by user")
        return 130

    except Exception as e:
        log.error("Execution failed: %s", e, exc_info=True)
        return 1
