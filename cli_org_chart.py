#!/usr/bin/env python3
"""
CLI for inspecting an org chart from a JSON entity file.

Builds the sorted forest, optionally applies a branch filter, and prints
an indented tree (or JSON).
"""
import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger
from pydantic import ValidationError

from api.dependencies import get_org_chart_service, get_settings
from api.schemas import FilterRequest, parse_entities
from config.logging_config import setup_logging
from core.constants import LOG_LEVELS, FilterMode
from core.exceptions import DuplicateEntityError
from serving.org_chart_service import OrgChartService
from utils.text_utils import get_initials


def load_entities(path: Path) -> list:
    """Load and validate an entity list from a JSON file."""
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get('entities', data.get('users', []))
    return parse_entities(data)


def render_lines(chart: OrgChartService) -> List[str]:
    """
    Render the forest as indented text lines.

    A hidden node takes its whole subtree with it.
    """
    lines = []
    stack = list(reversed(chart.roots))
    while stack:
        node = stack.pop()
        if chart.is_hidden(node):
            continue
        stack.extend(reversed(node.children))
        markers = []
        if chart.filter_results is not None:
            result = chart.filter_results.get(node.id)
            if result is not None and result.matched:
                markers.append('*')
            if chart.is_dimmed(node):
                markers.append('dimmed')
        label = f"[{get_initials(node.entity)}] {node.display_name}"
        if node.entity.role:
            label += f" - {node.entity.role}"
        if markers:
            label += f"  ({', '.join(markers)})"
        lines.append("  " * node.level + label)
    return lines


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Print an org chart from a JSON entity file")
    parser.add_argument('file', type=Path, help='JSON file with a list of entity records')
    parser.add_argument('--filter-branch', default='', help='Branch id to filter by')
    parser.add_argument(
        '--mode',
        choices=[mode.value for mode in FilterMode],
        default=FilterMode.HIGHLIGHT.value,
        help='Filter mode used with --filter-branch'
    )
    parser.add_argument('--json', action='store_true', help='Print the forest as JSON')
    parser.add_argument(
        '--log-level',
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help='Override ORGCHART_LOG_LEVEL'
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(args.log_level or settings.log_level)

    if not args.file.exists():
        print(f"Error: File not found: {args.file}", file=sys.stderr)
        return 1

    try:
        entities = load_entities(args.file)
        chart = get_org_chart_service(entities, settings)
    except (json.JSONDecodeError, ValidationError, DuplicateEntityError) as e:
        logger.error(f"Could not load {args.file}: {e}")
        return 1

    if args.filter_branch:
        request = FilterRequest(mode=args.mode, target_id=args.filter_branch)
        chart.set_filter(request.mode, request.target_id)

    if args.json:
        print(json.dumps(chart.to_dict(), indent=2, ensure_ascii=False))
    else:
        for line in render_lines(chart):
            print(line)
        print(f"\n{chart.node_count()} entities, {len(chart.warnings)} cycle warning(s)")

    return 0


if __name__ == "__main__":
    sys.exit(main())
