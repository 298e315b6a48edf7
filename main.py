import argparse
import json
import logging
import sys

from markuptree.node import to_json_ready
from markuptree.parser import parse, print_tree
from markuptree.state_machine import TagScanner
from markuptree.tokenizer import MarkupSyntaxError


def build_argparser() -> argparse.ArgumentParser:
    argparser = argparse.ArgumentParser(
        description="Parse markup into a tree of elements, text and comments."
    )
    argparser.add_argument("file", nargs="?", default="-")
    argparser.add_argument("--json", action="store_true")
    argparser.add_argument("--indent", type=int, default=2)
    argparser.add_argument("--tokens", action="store_true")
    argparser.add_argument("--log-level", default="WARNING")
    return argparser


def read_markup(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, encoding="utf-8") as f:
        return f.read()


def main(argv: list[str] | None = None) -> int:
    args = build_argparser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper())

    markup = read_markup(args.file)

    if args.tokens:
        for kind, value in TagScanner(markup=markup).process_string():
            print(f"{kind}: {value!r}")
        return 0

    try:
        nodes = parse(markup)
    except MarkupSyntaxError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(to_json_ready(nodes), indent=args.indent, ensure_ascii=False))
    else:
        for node in nodes:
            print_tree(node)
    return 0


if __name__ == "__main__":
    sys.exit(main())
