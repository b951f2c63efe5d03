"""Command-line entry point: ``handler-bind PATH...``."""

from __future__ import annotations

import argparse
import logging
import sys

from . import constants
from .runner import run_batch
from .transform_types import BindStyle, TransformConfig


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Normalize JSX event-handler bindings in React class components"
    )
    parser.add_argument("paths", nargs="+",
                        help="Files or directories to transform")
    parser.add_argument("--write", "-w", action="store_true",
                        help="Write changed files back (default: report only)")
    parser.add_argument("--base-component", default=constants.BASE_COMPONENT_NAME,
                        help="Base component class name (default: Component)")
    parser.add_argument("--namespace", default=constants.FRAMEWORK_NAMESPACE,
                        help="Framework namespace alias (default: React)")
    parser.add_argument("--render-method", default=constants.RENDER_METHOD_NAME,
                        help="Method whose markup is scanned (default: render)")
    parser.add_argument("--bind-style", default=BindStyle.OPERATOR.value,
                        choices=[style.value for style in BindStyle],
                        help="Constructor binding idiom (default: operator)")
    parser.add_argument("--json", action="store_true",
                        help="Print the batch report as JSON")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(name)s: %(message)s",
    )

    config = TransformConfig(
        base_component=args.base_component,
        framework_namespace=args.namespace,
        render_method=args.render_method,
        bind_style=BindStyle(args.bind_style),
    )
    report = run_batch(args.paths, config, write=args.write)

    if args.json:
        print(report.model_dump_json(indent=2))
    else:
        for result in report.results:
            suffix = f"  ({result.error})" if result.error else ""
            print(f"  {result.status.value:<10} {result.path}{suffix}")
        print(report.summary())

    return 1 if report.failed else 0


if __name__ == "__main__":
    sys.exit(main())
