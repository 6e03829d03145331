"""Command-line interface for rendering letters to PDF."""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from .assembler import layout, layout_info_sheet, layout_reply_form, estimate_pdf_size
from .config import load_config
from .content import LetterContent, load_letter_content
from .document import Document
from .errors import LetterLayoutError
from .layout_report import write_layout_report
from .pdf_renderer import PDFRenderer
from .sample import SampleLetterGenerator


def build_document(content: LetterContent, args: argparse.Namespace) -> Document:
    """Lay out the part of the letter selected on the command line."""
    config = load_config(args.config)

    if args.info_sheet_only:
        return layout_info_sheet(content, config)
    if args.reply_form_only:
        return layout_reply_form(content, config)
    if args.main_only:
        content = replace(content, include_info_sheet=False, include_reply_form=False)
    return layout(content, config)


def write_outputs(document: Document, args: argparse.Namespace) -> None:
    out_path: Path = args.out
    out_path.parent.mkdir(parents=True, exist_ok=True)
    PDFRenderer(invariant=args.invariant).render_to_file(document, out_path)
    print(f"  PDF: {out_path}")

    if args.layout_json:
        write_layout_report(document, args.layout_json)
        print(f"  Layout: {args.layout_json}")

    print(f"  Pages: {document.page_count}")


def cmd_render(args: argparse.Namespace) -> None:
    content = load_letter_content(args.input)
    print(f"Rendering {args.input} (estimated {estimate_pdf_size(content) // 1000} KB)...")
    document = build_document(content, args)
    write_outputs(document, args)


def cmd_sample(args: argparse.Namespace) -> None:
    generator = SampleLetterGenerator(seed=args.seed)
    content = generator.letter_before_action(
        paragraphs=args.paragraphs,
        with_signature=not args.no_signature,
    )
    print(f"Rendering sample letter (seed {args.seed})...")
    document = build_document(content, args)
    write_outputs(document, args)


def add_output_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-o", "--out",
        type=Path,
        required=True,
        help="Output PDF path",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to YAML layout configuration file",
    )
    parser.add_argument(
        "--layout-json",
        type=Path,
        help="Also write the laid-out page model as JSON",
    )
    parser.add_argument(
        "--invariant",
        action="store_true",
        help="Produce byte-identical PDFs for identical input",
    )

    only = parser.add_mutually_exclusive_group()
    only.add_argument("--main-only", action="store_true", help="Render the letter without annexes")
    only.add_argument("--info-sheet-only", action="store_true", help="Render only the information sheet")
    only.add_argument("--reply-form-only", action="store_true", help="Render only the reply form")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="letter-layout",
        description="Lay out UK legal letters and their annexes as paginated PDFs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Log layout decisions (-v info, -vv debug)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    render_parser = subparsers.add_parser("render", help="Render letter content from a JSON or YAML file")
    render_parser.add_argument("input", type=Path, help="Letter content (.json, .yaml or .yml)")
    add_output_arguments(render_parser)
    render_parser.set_defaults(func=cmd_render)

    sample_parser = subparsers.add_parser("sample", help="Render a generated sample letter before action")
    sample_parser.add_argument("--seed", type=int, default=42, help="Random seed")
    sample_parser.add_argument("--paragraphs", type=int, default=3, help="Number of body paragraphs")
    sample_parser.add_argument("--no-signature", action="store_true", help="Leave space for a handwritten signature")
    add_output_arguments(sample_parser)
    sample_parser.set_defaults(func=cmd_sample)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        args.func(args)
    except LetterLayoutError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
