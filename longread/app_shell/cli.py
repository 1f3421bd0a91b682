import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path

from longread.adapters.content_source import ContentSource
from longread.adapters.fs.filestore import FileSystemStore
from longread.adapters.overrides_file import load_overrides
from longread.components.blocks import ExtractBlocksInput, run_extract_blocks
from longread.components.segmentation import PaywallOverride, segment_markdown
from longread.core.services.paywall_build import (
    BuildConfig,
    PaywallBuildService,
    PartialCache,
)
from longread.rules.loader import load_rules
from longread.rules.models import Rules

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("cli")

RULES_PATH = "rules.yaml"


def get_rules(path: str) -> Rules:
    if not Path(path).exists():
        logger.error(f"Rules file {path} not found.")
        sys.exit(1)
    return load_rules(Path(path))


def read_markdown(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def handle_build(rules: Rules, args: argparse.Namespace) -> int:
    config = BuildConfig.from_rules(rules)
    if args.strategy:
        config = replace(config, strategy=args.strategy)

    content = rules.content
    source = ContentSource(args.content or content.root, [b.name for b in content.branches])
    service = PaywallBuildService(
        store=FileSystemStore(args.out or rules.locked_store.output_dir),
        config=config,
        overrides=load_overrides(content.overrides_path),
        partials=PartialCache(Path(content.partials_dir)),
    )

    report = service.build_all(source.load_all())
    if args.pages:
        pages = FileSystemStore(args.pages)
        for result in report.built:
            pages.save(f"{result.key.branch}/{result.key.slug}.html", result.page_html.encode("utf-8"))

    print(
        f"Built {len(report.built)} articles, "
        f"{report.locked_artifacts} locked artifacts, {len(report.skipped)} skipped."
    )
    return 1 if report.skipped else 0


def handle_blocks(args: argparse.Namespace) -> int:
    output = run_extract_blocks(
        ExtractBlocksInput(
            markdown=read_markdown(args.file),
            strip_leading_heading=args.strip_heading,
        )
    )
    if args.json:
        payload = {
            "blocks": [block.to_dict() for block in output.blocks],
            "totalBlocks": output.total_blocks,
        }
        print(json.dumps(payload, ensure_ascii=False, indent=2))
        return 0

    for block in output.blocks:
        preview = block.text if len(block.text) <= 72 else block.text[:71] + "…"
        print(f"{block.index:>3}  {block.token_kind:<10}  {preview}")
    print(f"Total blocks: {output.total_blocks}")
    return 0


def handle_segment(rules: Rules, args: argparse.Namespace) -> int:
    config = BuildConfig.from_rules(rules)
    override = None
    if args.open is not None:
        override = PaywallOverride.from_mapping({"openBlocks": args.open, "teaserBlocks": args.teaser})

    result = segment_markdown(
        read_markdown(args.file),
        override=override,
        strategy=args.strategy or config.strategy,
        config=config.segmentation,
        strip_heading=args.strip_heading,
    )
    data = result.to_dict()
    data["override"] = override.to_dict() if override else None
    print(json.dumps(data, ensure_ascii=False, indent=2))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Longread paywall CLI")
    parser.add_argument("--rules", default=RULES_PATH, help="Path to rules.yaml")
    subparsers = parser.add_subparsers(dest="command", required=True)

    strategies = ["primary", "editorial", "divider"]

    # build
    build_parser = subparsers.add_parser("build", help="Segment all articles and write locked content")
    build_parser.add_argument("--content", help="Content root (default from rules)")
    build_parser.add_argument("--out", help="Output directory for locked artifacts")
    build_parser.add_argument("--pages", help="Also write article body fragments here")
    build_parser.add_argument("--strategy", choices=strategies)

    # blocks
    blocks_parser = subparsers.add_parser("blocks", help="List the countable blocks of an article")
    blocks_parser.add_argument("file", help="Markdown file, or - for stdin")
    blocks_parser.add_argument("--strip-heading", action="store_true", help="Drop the leading # title")
    blocks_parser.add_argument("--json", action="store_true", help="Print JSON")

    # segment
    segment_parser = subparsers.add_parser("segment", help="Show the paywall split of an article")
    segment_parser.add_argument("file", help="Markdown file, or - for stdin")
    segment_parser.add_argument("--open", type=float, help="Override openBlocks")
    segment_parser.add_argument("--teaser", type=float, help="Override teaserBlocks")
    segment_parser.add_argument("--strategy", choices=strategies)
    segment_parser.add_argument("--strip-heading", action="store_true", help="Drop the leading # title")

    args = parser.parse_args(argv)

    if args.command == "blocks":
        return handle_blocks(args)

    rules = get_rules(args.rules)
    if args.command == "build":
        return handle_build(rules, args)
    elif args.command == "segment":
        return handle_segment(rules, args)
    return 2


if __name__ == "__main__":
    sys.exit(main())
