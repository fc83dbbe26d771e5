#!/usr/bin/env python
"""Render a message body file, showing line classes and tokens.

Usage:
    python scripts/render_body.py message.txt                 # Print HTML
    python scripts/render_body.py message.txt --flowed        # format=flowed body
    python scripts/render_body.py message.txt --lines --tokens
    python scripts/render_body.py message.txt --config quotemark.yaml
"""

import argparse
import dataclasses
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from quotemark.config import ParserConfig, load_config
from quotemark.parser import MessageBodyParser, ParsedBody
from quotemark.pipeline.lines import LineClassifier, split_lines


def print_lines(body: str, flowed: bool) -> None:
    """Print every line with its classification."""
    classifier = LineClassifier(flowed=flowed)

    print("LINES:")
    print(f"  {'#':>4}  {'Kind':<10} {'Depth':>5}  Content")
    print(f"  {'-'*4}  {'-'*10} {'-'*5}  {'-'*55}")

    for i, raw in enumerate(split_lines(body)):
        line = classifier.classify(raw)
        preview = line.content[:55] + "..." if len(line.content) > 55 else line.content
        print(f"  {i:>4}  {line.kind:<10} {line.quote_depth:>5}  {preview!r}")

    print()


def print_tokens(parsed: ParsedBody) -> None:
    """Print the token stream, indented by nesting level."""
    print("TOKENS:")
    level = 0

    for token in parsed.tokens:
        if token.tag_type == "CLOSE":
            level = max(level - 1, 0)

        if token.kind == "TEXT":
            detail = repr(token.text[:60])
        elif token.kind == "BLOCK":
            detail = repr(token.block)
        else:
            detail = ""
        print(f"  {'  ' * level}{token.kind} {detail}".rstrip())

        if token.tag_type == "OPEN":
            level += 1

    print()


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("body_file", type=Path, help="Decoded message body")
    parser.add_argument("--config", type=Path, help="YAML parser config")
    parser.add_argument("--flowed", action="store_true", help="Treat the body as format=flowed")
    parser.add_argument("--lines", action="store_true", help="Show line classification")
    parser.add_argument("--tokens", action="store_true", help="Show the token stream")
    parser.add_argument("--search", action="store_true", help="Show search text and summary")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    config = load_config(args.config) if args.config else ParserConfig()
    if args.flowed:
        config = dataclasses.replace(config, flowed=True)

    body = args.body_file.read_text(encoding="utf-8")
    parsed = MessageBodyParser(config).parse(body)

    print(f"File: {args.body_file}")
    print(f"Flowed: {config.flowed}  Signature: {parsed.has_signature}  Max quote depth: {parsed.max_quote_depth}")
    print("=" * 80)
    print()

    if args.lines:
        print_lines(body, config.flowed)

    if args.tokens:
        print_tokens(parsed)

    if args.search:
        print("SEARCH TEXT:")
        print(parsed.search_text)
        print("SUMMARY:")
        print(parsed.summary)
        print()

    print("HTML:")
    print(parsed.html, end="")


if __name__ == "__main__":
    main()
