"""SiteRank CLI - ranked comparison of website analysis results.

Main command-line interface: collects the sites to compare, sends them to the
analysis service and shows the ranked, expandable results table.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from . import __version__
from .config import OUTPUT_FORMATS, ViewerConfig
from .engine.collector import read_text
from .output.html_out import HTMLOutput
from .output.json_out import JSONOutput
from .output.markdown import MarkdownOutput
from .output.terminal import TerminalOutput
from .session import PanelStatus, ResultsPanel, ViewerSession

logger = logging.getLogger(__name__)

INPUT_PROMPT = "Enter URLs to analyze, one per line. Finish with an empty line:"
RESULTS_PROMPT = "Row number to show/hide details, [n] new analysis, [q] quit"


def parse_ranks(ranks_str: str) -> list[int]:
    """Parse a comma-separated list of 1-based ranks.

    Raises:
        argparse.ArgumentTypeError: If any entry is not a positive integer
    """
    result = []
    for part in ranks_str.split(','):
        part = part.strip()
        if not part.isdigit() or int(part) < 1:
            raise argparse.ArgumentTypeError(f"Invalid rank '{part}'. Ranks start at 1")
        result.append(int(part))
    return result


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def show_panel(output: TerminalOutput, session: ViewerSession) -> None:
    """Draw the session's current results panel on the terminal."""
    panel = session.panel
    if panel.status == PanelStatus.PROMPT:
        output.print_prompt(panel.message)
    elif panel.status == PanelStatus.IN_PROGRESS:
        output.print_status(panel.message)
    elif panel.status == PanelStatus.ERROR:
        output.print_error(panel.message)
    elif panel.status == PanelStatus.RESULTS and panel.view_model is not None:
        output.print_results(panel.view_model, session.controller)


def _read_identifier_block(output: TerminalOutput) -> str | None:
    """Read lines until an empty line; None on end of input."""
    output.print_prompt(INPUT_PROMPT)
    lines = []
    while True:
        try:
            line = output.console.input("> ")
        except EOFError:
            return "\n".join(lines) if lines else None
        if not line.strip():
            return "\n".join(lines)
        lines.append(line)


def run_interactive(session: ViewerSession, output: TerminalOutput) -> int:
    """Interactive loop: input box, analyze trigger, expandable results."""
    output.print_header(session.config.service_url)

    while True:
        text = _read_identifier_block(output)
        if text is None:
            return 0

        asyncio.run(session.submit(text))
        show_panel(output, session)
        if session.panel.status != PanelStatus.RESULTS:
            continue

        while True:
            try:
                command = output.console.input(f"{RESULTS_PROMPT}: ", markup=False).strip().lower()
            except EOFError:
                return 0

            if command == 'q':
                return 0
            if command == 'n':
                break
            if command.isdigit():
                try:
                    session.toggle_rank(int(command))
                except KeyError:
                    output.print_prompt(f"No row {command}")
                    continue
                show_panel(output, session)
            elif command:
                output.print_prompt(f"Unknown command '{command}'")


def write_report(
    panel: ResultsPanel,
    session: ViewerSession,
    output_format: str,
    output_path: Path | None,
    no_color: bool = False,
) -> None:
    """Write the results of a batch run in the requested format."""
    service_url = session.config.service_url

    if output_format == 'terminal':
        output = TerminalOutput(no_color=no_color)
        output.print_header(service_url)
        output.print_results(panel.view_model, session.controller)
        output.print_footer(len(panel.ranked))
        return

    if output_format == 'json':
        content = JSONOutput(session.aggregator).to_json(panel.ranked, service_url=service_url)
    elif output_format == 'markdown':
        content = MarkdownOutput().generate(panel.view_model, service_url=service_url)
    else:
        html = HTMLOutput()
        if output_path:
            content = html.document(panel.view_model, session.controller)
        else:
            content = html.generate(panel.view_model, session.controller)

    if output_path:
        output_path.write_text(content, encoding='utf-8')
        print(f"Report saved to: {output_path}", file=sys.stderr)
    else:
        print(content)


def run_batch(
    session: ViewerSession,
    input_arg: str,
    parsed_args: argparse.Namespace,
) -> int:
    """Analyze identifiers read from a file or stdin and print the report."""
    text = read_text(input_arg)
    panel = asyncio.run(session.submit(text))

    if panel.status == PanelStatus.PROMPT:
        print(panel.message, file=sys.stderr)
        return 2
    if panel.status == PanelStatus.ERROR:
        print(panel.message, file=sys.stderr)
        return 1

    if parsed_args.expand_all:
        session.controller.expand_all()
    for rank in parsed_args.expand or []:
        try:
            row_id = panel.view_model.row_id_for_rank(rank)
        except KeyError:
            logger.warning("No row at rank %d; --expand entry ignored", rank)
            continue
        if not session.controller.is_expanded(row_id):
            session.toggle(row_id)

    write_report(
        panel,
        session,
        session.config.output_format,
        parsed_args.output,
        no_color=session.config.no_color,
    )
    return 0


def main(args: list[str] | None = None) -> int:
    """Main CLI entry point.

    Args:
        args: Command line arguments (defaults to sys.argv)

    Returns:
        Exit code
    """
    parser = argparse.ArgumentParser(
        prog='siterank',
        description='Compare websites by performance, security and SEO using a remote analysis service',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  siterank                                       # interactive mode
  siterank urls.txt
  cat urls.txt | siterank                        # pipe input
  siterank urls.txt --format html --output report.html
  siterank urls.txt --expand 1,3 --no-color
  siterank urls.txt --service-url http://analyzer:8080
        """
    )

    parser.add_argument(
        'input',
        nargs='?',
        help='File with one URL per line, or "-" for stdin (omit for interactive mode)'
    )

    parser.add_argument(
        '-s', '--service-url',
        metavar='URL',
        help='Analysis service base URL (default: $SITERANK_SERVICE_URL or http://localhost:8080)'
    )

    parser.add_argument(
        '--timeout',
        type=float,
        metavar='SECONDS',
        help='Give up on the analysis request after this many seconds (default: wait indefinitely)'
    )

    parser.add_argument(
        '-f', '--format',
        choices=OUTPUT_FORMATS,
        default='terminal',
        help='Output format for file/stdin input (default: terminal)'
    )

    parser.add_argument(
        '-o', '--output',
        type=Path,
        help='Output file (default: stdout)'
    )

    parser.add_argument(
        '--expand',
        metavar='RANK[,RANK...]',
        type=parse_ranks,
        help='Show the detail panels of these ranks'
    )

    parser.add_argument(
        '--expand-all',
        action='store_true',
        help='Show every detail panel'
    )

    parser.add_argument(
        '--no-color',
        action='store_true',
        help='Disable colored output (terminal only)'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Verbose output'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    parsed_args = parser.parse_args(args)
    configure_logging(parsed_args.verbose)

    if parsed_args.timeout is not None and parsed_args.timeout <= 0:
        parser.error('--timeout must be positive')

    try:
        config = ViewerConfig.from_env().merged(
            service_url=parsed_args.service_url,
            timeout=parsed_args.timeout,
            no_color=True if parsed_args.no_color else None,
            output_format=parsed_args.format,
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    input_arg = parsed_args.input

    # Support piped stdin when no input argument is given
    if input_arg is None and not sys.stdin.isatty():
        input_arg = '-'

    if input_arg is not None and input_arg != '-':
        input_path = Path(input_arg)
        if not input_path.exists():
            print(f"Error: Input file not found: {input_arg}", file=sys.stderr)
            return 1
        if not input_path.is_file():
            print(f"Error: Input is not a file: {input_arg}", file=sys.stderr)
            return 1

    try:
        if input_arg is None:
            output = TerminalOutput(no_color=config.no_color)

            def show_progress(panel: ResultsPanel) -> None:
                if panel.status == PanelStatus.IN_PROGRESS:
                    output.print_status(panel.message)

            session = ViewerSession(config, on_change=show_progress)
            return run_interactive(session, output)

        return run_batch(ViewerSession(config), input_arg, parsed_args)

    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130
    except (MemoryError, RecursionError):
        raise
    except Exception as e:
        print(f"Error ({type(e).__name__}): {e}", file=sys.stderr)
        if parsed_args.verbose:
            import traceback
            traceback.print_exc()
        else:
            print("Use --verbose for full traceback", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
