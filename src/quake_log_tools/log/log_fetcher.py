"""
Quake Log Fetcher

This module retrieves Quake 3 Arena server logs, either over HTTP(S) or from
the local filesystem, and hands them to the match parser as a list of lines.
"""

import argparse
import logging
from pathlib import Path
from typing import Dict, Any, List, Optional

import requests

from ..base import FileBasedTool, QuakeTool

logger = logging.getLogger(__name__)

# Public sample log used when neither the command line nor the profile names one
DEFAULT_LOG_URL = (
    "https://gist.githubusercontent.com/cloudwalk-tests/be1b636e58abff14088c8b5309f575d8"
    "/raw/df6ef4a9c0b326ce3760233ef24ae8bfa8e33940/qgames.log"
)
DEFAULT_TIMEOUT = 30
REMOTE_SCHEMES = ("http://", "https://")


class LogFetcher(FileBasedTool):
    """Tool for reading a server log from a URL or a local file."""

    def __init__(self, config: Optional[Dict[str, Any]] = None) -> None:
        """
        Initialize the log fetcher.

        Args:
            config: Optional configuration dictionary.
        """
        super().__init__(config)
        self.default_url = self.get_config('log_source.url') or DEFAULT_LOG_URL
        self.timeout = self.get_config('log_source.timeout', DEFAULT_TIMEOUT)
        self.ssl_verify = self.get_config('log_source.ssl_verify', True)

        logger.debug(f"Default log URL: {self.default_url}")
        logger.debug(f"Timeout: {self.timeout}s, SSL verify: {self.ssl_verify}")

    def fetch_log(self, url: Optional[str] = None) -> str:
        """
        Download a log over HTTP(S).

        Args:
            url: Address of the log. Defaults to the configured log URL.

        Returns:
            The log content as text.

        Raises:
            requests.RequestException: If the request fails or the status is not 200.
        """
        url = url or self.default_url
        logger.info(f"Fetching log from {url}")

        try:
            response = requests.get(url, timeout=self.timeout, verify=self.ssl_verify)
            if response.status_code != requests.codes.ok:
                raise requests.HTTPError(
                    f"Unexpected status code: {response.status_code}", response=response
                )
        except requests.RequestException as e:
            logger.error(f"Failed to fetch log: {e}")
            raise

        content = response.content.decode('utf-8', errors='replace')
        logger.info(f"Fetched {len(response.content)} bytes from {url}")
        return content

    def read_local_log(self, file_path: str) -> str:
        """
        Read a log file from disk.

        Args:
            file_path: Path to the log file.

        Returns:
            The log content as text.

        Raises:
            FileNotFoundError: If the file does not exist.
        """
        resolved_path = self.resolve_path(file_path)
        if not Path(resolved_path).is_file():
            raise FileNotFoundError(f"Log file not found: {resolved_path}")

        logger.info(f"Reading log file: {resolved_path}")
        with open(resolved_path, 'r', encoding='utf-8', errors='replace', newline='') as f:
            return f.read()

    def load_lines(self, source: Optional[str] = None) -> List[str]:
        """
        Load a log from a URL or a path and split it into lines.

        Args:
            source: URL or file path. Defaults to the configured log URL.

        Returns:
            The log lines, split on "\n" only.
        """
        source = source or self.default_url
        if source.lower().startswith(REMOTE_SCHEMES):
            text = self.fetch_log(source)
        else:
            text = self.read_local_log(source)

        lines = text.split("\n")
        logger.debug(f"Loaded {len(lines)} lines from {source}")
        return lines

    def save_log(self, url: Optional[str], output_file: str) -> str:
        """
        Download a log and store it on disk.

        Args:
            url: Address of the log. Defaults to the configured log URL.
            output_file: Destination file.

        Returns:
            Absolute path of the written file.
        """
        content = self.fetch_log(url)

        output_path = Path(self.resolve_path(output_file))
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding='utf-8')

        logger.info(f"Successfully saved: {output_path}")
        return str(output_path)

    def run(self, url: Optional[str] = None, output_file: str = "qgames.log") -> Dict[str, Any]:
        """
        Download a log to disk.

        Args:
            url: Address of the log.
            output_file: Destination file.

        Returns:
            Dictionary with the success flag and the written path.
        """
        try:
            path = self.save_log(url, output_file)
        except (requests.RequestException, OSError) as e:
            logger.error(f"Error downloading log: {e}")
            return {"success": False, "output_file": None}

        return {"success": True, "output_file": path}


def main():
    """
    Main entry point for the log fetcher command line tool.
    """
    parser = argparse.ArgumentParser(
        description="Download a Quake 3 Arena server log to a local file.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s --output qgames.log
    %(prog)s --url https://example.com/games.log --output games.log

Configuration:
    - log_source.url: Log URL used when --url is omitted
    - log_source.timeout: HTTP timeout in seconds
        """
    )
    parser.add_argument(
        "--url",
        help="URL of the log. If not specified, uses the configured URL or the public sample log."
    )
    parser.add_argument(
        "--output",
        default="qgames.log",
        help="File to write the log to (default: qgames.log)"
    )

    QuakeTool.add_standard_arguments(parser)
    args = parser.parse_args()

    try:
        config = QuakeTool.load_config(args.profile)

        fetcher = LogFetcher(config)
        result = fetcher.run(args.url, args.output)

        if args.console:
            logger.info(f"Log download completed: {result}")

        return 0 if result["success"] else 1

    except Exception as e:
        logger.error(f"Error: {e}")
        return 1


if __name__ == "__main__":
    exit(main())
