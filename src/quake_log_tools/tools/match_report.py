#!/usr/bin/env python3
"""
Quake Log Tools - Match Report

Parses a Quake 3 Arena server log and reports, for every match, the total
number of kills, each player's net score and how often each cause of death
occurred. The report is printed to the console and can also be exported to
CSV, JSON or Excel.
"""

import argparse
import logging
from typing import Dict, List, Tuple, Any, Optional, Sequence

from ..base import JSONTool, QuakeTool
from ..log.log_fetcher import LogFetcher
from ..parser import MatchRecord, parse_log_lines

logger = logging.getLogger(__name__)

SEPARATOR = "-" * 39


def sort_by_value_descending(mapping: Dict[str, int]) -> List[Tuple[str, int]]:
    """
    Sort a name -> count mapping by value, highest first.

    Ties keep the mapping's insertion order.
    """
    return sorted(mapping.items(), key=lambda item: item[1], reverse=True)


def format_report(matches: Sequence[MatchRecord]) -> List[str]:
    """
    Render the kill report for a list of matches.

    Args:
        matches: Parsed match records in log order.

    Returns:
        The report lines.
    """
    lines = [SEPARATOR, "Matches kill report:", SEPARATOR]

    for number, match in enumerate(matches, start=1):
        lines.append(f"Match {number}:")
        lines.append(f"Total Kills: {match.total_kills}")
        lines.append("Scores:")
        lines.extend(f"- {name}: {score}" for name, score in sort_by_value_descending(match.player_scores))
        lines.append("Cause of Death:")
        lines.extend(f"- {cause}: {count}" for cause, count in sort_by_value_descending(match.cause_of_death))
        lines.append(SEPARATOR)

    return lines


class MatchReportTool(JSONTool):
    """
    Builds per-match kill reports from Quake 3 Arena server logs.
    """

    EXPORT_FORMATS = ("csv", "json", "excel")
    CSV_HEADERS = ["Match", "Category", "Name", "Value"]

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the MatchReportTool with configuration.

        Args:
            config: Configuration dictionary from Config class
        """
        super().__init__(config)
        self.fetcher = LogFetcher(config)

    def build_report(self, source: Optional[str] = None) -> List[MatchRecord]:
        """
        Load a log and parse it into match records.

        Args:
            source: URL or file path of the log. Defaults to the configured URL.

        Returns:
            Match records in log order.
        """
        lines = self.fetcher.load_lines(source)
        return parse_log_lines(lines)

    def print_report(self, matches: Sequence[MatchRecord]) -> int:
        """
        Print the report to the console.

        Returns:
            Total number of kills across all matches.
        """
        for line in format_report(matches):
            print(line)
        return sum(match.total_kills for match in matches)

    def _prepare_csv_rows(self, matches: Sequence[MatchRecord]) -> List[Dict[str, Any]]:
        rows = []
        for number, match in enumerate(matches, start=1):
            rows.append({"Match": number, "Category": "Total Kills", "Name": "", "Value": match.total_kills})
            for name, score in sort_by_value_descending(match.player_scores):
                rows.append({"Match": number, "Category": "Score", "Name": name, "Value": score})
            for cause, count in sort_by_value_descending(match.cause_of_death):
                rows.append({"Match": number, "Category": "Cause of Death", "Name": cause, "Value": count})
        return rows

    def save_to_csv(self, matches: Sequence[MatchRecord]) -> str:
        """Save the report to a timestamped CSV file and return its path."""
        output_file = self.generate_timestamped_filename("match_report", "csv")
        return self.write_csv(self._prepare_csv_rows(matches), output_file, headers=self.CSV_HEADERS)

    def save_to_json(self, matches: Sequence[MatchRecord]) -> str:
        """Save the report to a timestamped JSON file keyed game_<n>."""
        data = {f"game_{number}": match.to_dict() for number, match in enumerate(matches, start=1)}
        output_file = self.generate_timestamped_filename("match_report", "json")
        return self.write_json(data, output_file)

    def save_to_excel(self, matches: Sequence[MatchRecord]) -> str:
        """
        Save the report to an Excel workbook with Scores and CauseOfDeath sheets.

        Returns:
            Path to the saved workbook
        """
        import pandas as pd

        score_rows = []
        cause_rows = []
        for number, match in enumerate(matches, start=1):
            score_rows.extend(
                {"Match": number, "Player": name, "Score": score}
                for name, score in sort_by_value_descending(match.player_scores)
            )
            cause_rows.extend(
                {"Match": number, "Cause": cause, "Count": count}
                for cause, count in sort_by_value_descending(match.cause_of_death)
            )

        scores_df = pd.DataFrame(score_rows, columns=["Match", "Player", "Score"])
        causes_df = pd.DataFrame(cause_rows, columns=["Match", "Cause", "Count"])

        output_path = self._output_path(self.generate_timestamped_filename("match_report", "xlsx"))
        with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
            scores_df.to_excel(writer, sheet_name="Scores", index=False)
            causes_df.to_excel(writer, sheet_name="CauseOfDeath", index=False)

        logger.info(f"Excel report written to {output_path}")
        return output_path

    def export(self, matches: Sequence[MatchRecord], export_formats: Sequence[str]) -> List[str]:
        """
        Export the report in each requested format.

        Raises:
            ValueError: If a format is not one of EXPORT_FORMATS.
        """
        unknown = [fmt for fmt in export_formats if fmt not in self.EXPORT_FORMATS]
        if unknown:
            raise ValueError(f"Unknown export format(s): {', '.join(unknown)}. "
                             f"Choose from: {', '.join(self.EXPORT_FORMATS)}")

        if export_formats:
            self.initialize_directories()

        exporters = {
            "csv": self.save_to_csv,
            "json": self.save_to_json,
            "excel": self.save_to_excel,
        }
        return [exporters[fmt](matches) for fmt in export_formats]

    def run(self, source: Optional[str] = None,
            export_formats: Optional[Sequence[str]] = None) -> Dict[str, Any]:
        """
        Run the match report.

        Args:
            source: URL or file path of the log
            export_formats: Formats to export in addition to the console report.
                Defaults to report.export_formats from the configuration.

        Returns:
            Dictionary with analysis results
        """
        if export_formats is None:
            export_formats = self.get_config('report.export_formats', [])
        if isinstance(export_formats, str):
            export_formats = [export_formats]

        logger.info("Starting match report...")
        matches = self.build_report(source)

        result = {
            "success": True,
            "match_count": len(matches),
            "total_kills": self.print_report(matches),
            "output_files": self.export(matches, export_formats),
        }

        if not matches:
            logger.warning("No matches found in the log.")

        logger.info(f"Report complete: {result['match_count']} matches, {result['total_kills']} kills")
        return result


def main(argv=None):
    """
    Main entry point for the match report command line tool.
    """
    parser = argparse.ArgumentParser(
        description="Report kills, player scores and causes of death for every match in a Quake 3 Arena log.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s
    %(prog)s games.log --export csv --export json
    %(prog)s https://example.com/qgames.log --profile my_server

Configuration:
    - log_source.url: Log URL used when no source is given
    - general.output_path: Directory for exported reports
    - report.export_formats: Formats exported by default
        """
    )
    parser.add_argument(
        "source",
        nargs="?",
        help="URL or path of the log. If not specified, uses the configured URL or the public sample log."
    )
    parser.add_argument(
        "--export",
        action="append",
        choices=MatchReportTool.EXPORT_FORMATS,
        help="Export format. Can be specified multiple times."
    )
    parser.add_argument(
        "--output-dir",
        help="Directory for exported reports (overrides general.output_path)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output"
    )
    parser.add_argument(
        "--list-profiles",
        action="store_true",
        help="List the available configuration profiles and exit"
    )

    QuakeTool.add_standard_arguments(parser)
    args = parser.parse_args(argv)

    if args.list_profiles:
        from config.config import Config

        profiles = Config(profile=args.profile).list_profiles()
        if not profiles:
            print("No configuration profiles found.")
            return 0

        print("\nAvailable Configuration Profiles:")
        for name in profiles:
            print(f"  {name}")
        return 0

    try:
        config = QuakeTool.load_config(args.profile)

        if args.verbose:
            logging.getLogger().setLevel(logging.DEBUG)
            logger.debug("Verbose logging enabled via command line flag")

        if args.output_dir:
            config.setdefault('general', {})['output_path'] = args.output_dir

        tool = MatchReportTool(config)
        result = tool.run(args.source, args.export)

        if args.console:
            logger.info(f"Match report completed: {result}")

        return 0 if result["success"] else 1

    except Exception as e:
        logger.error(f"Error: {e}")
        return 1


if __name__ == "__main__":
    exit(main())
