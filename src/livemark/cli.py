"""
Command-line interface for livemark.
"""

import argparse
import logging
import sys
from typing import List

from linediff import LineRetain

from livemark.livemark_config import LivemarkConfig
from livemark.livemark_exceptions import LivemarkError
from livemark.livemark_html_renderer import LivemarkHTMLRenderer
from livemark.livemark_parser import LivemarkParser
from livemark.livemark_printer import LivemarkPrinter


def _read_lines(path: str) -> List[str]:
    with open(path, 'r', encoding='utf-8') as f:
        return f.read().split('\n')


def _create_parser(args: argparse.Namespace) -> LivemarkParser:
    config = LivemarkConfig.load_from_file(args.config) if args.config else None
    return LivemarkParser(config=config)


def handle_render(args: argparse.Namespace) -> int:
    """Handle the render command."""
    parser = _create_parser(args)
    rendered = parser.parse(_read_lines(args.file))

    if args.format == 'html':
        print(LivemarkHTMLRenderer().render_document(rendered))

    elif args.format == 'tree':
        print(LivemarkPrinter().format_state(parser.state))

    else:
        for num, line_type in enumerate(parser.state.line_types):
            print(f"{num + 1}: {line_type}")

    return 0


def handle_diff(args: argparse.Namespace) -> int:
    """Handle the diff command."""
    parser = _create_parser(args)
    old_rendered = parser.parse(_read_lines(args.old))
    new_rendered = parser.parse(_read_lines(args.new))

    renderer = LivemarkHTMLRenderer()
    for op in parser.diff(old_rendered, new_rendered):
        if isinstance(op, LineRetain):
            print(f"retain {op.count}")
            continue

        print(f"replace {op.start} -{op.old_count} +{op.new_count}")
        for line in op.new_lines:
            print(f"  {renderer.render_line(line)}")

    return 0


def main() -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Render Markdown-like text line by line",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s render notes.md                 # Render to HTML
  %(prog)s render notes.md --format tree   # Show the span structure
  %(prog)s render notes.md --format types  # Show the type of each line
  %(prog)s diff old.md new.md              # Show the edit script between two renderings
        """
    )
    parser.add_argument('--verbose', '-v', action='store_true', help='Verbose output')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    render_parser = subparsers.add_parser('render', help='Render a file')
    render_parser.add_argument('file', help='File to render')
    render_parser.add_argument('--format', '-f', choices=['html', 'tree', 'types'], default='html',
                               help='Output format')
    render_parser.add_argument('--config', '-c', help='Configuration file path')

    diff_parser = subparsers.add_parser('diff', help='Diff the renderings of two files')
    diff_parser.add_argument('old', help='Original file')
    diff_parser.add_argument('new', help='Updated file')
    diff_parser.add_argument('--config', '-c', help='Configuration file path')

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    try:
        if args.command == 'render':
            return handle_render(args)

        return handle_diff(args)

    except (OSError, LivemarkError) as e:
        print(f"Error: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
