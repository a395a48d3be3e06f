"""CLI entrypoint for the productivity toolkit.

Usage:
  toolkit research "AI automation trends" --deep
  toolkit write "5 tips for productivity" --type blog --tone casual
  toolkit capture "Follow up with client about proposal"
  toolkit process
  toolkit review
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from dotenv import load_dotenv

from agent_logging import configure_agent_loggers

from .agents.content_writer import ContentWriter
from .agents.research_agent import ResearchAgent
from .capture.processor import CaptureProcessor
from .config import ToolkitConfig, load_config
from .review.weekly_generator import WeeklyReviewGenerator

logger = logging.getLogger(__name__)

COMMANDS = ("research", "write", "capture", "process", "review")

USAGE = """
🛠️  Toolkit CLI

Commands:
  research <topic>    Research a topic and save to RESEARCH.md
    --quick           Quick research (1 search)
    --deep            Deep research (5 searches)

  write <topic>       Generate content
    --type <type>     blog, social, email, script, outline, thread
    --tone <tone>     professional, casual, friendly, authoritative, witty

  capture <text>      Quick capture to inbox

  process             Process captured items (categorize & route)

  review              Generate weekly review

Global options (before or after the command):
  -v, --verbose       Show progress logging
  --base-dir <path>   Directory holding the markdown files
  --config <path>     Config file (YAML or JSON)

Examples:
  toolkit research "AI automation best practices" --deep
  toolkit write "5 tips for productivity" --type blog --tone casual
  toolkit capture "Follow up with client about proposal"
  toolkit process
  toolkit review
"""

COMMAND_USAGE = {
    "research": 'Usage: toolkit research "topic" [--quick|--deep]',
    "write": (
        'Usage: toolkit write "topic" [--type blog|social|email|script|outline|thread] '
        "[--tone professional|casual|friendly|authoritative|witty]"
    ),
    "capture": 'Usage: toolkit capture "something to remember"',
}


def build_parser() -> argparse.ArgumentParser:
    # Global options work before or after the command; SUPPRESS keeps a
    # value given before the command from being reset by the subparser.
    global_options = argparse.ArgumentParser(add_help=False)
    global_options.add_argument(
        "-v", "--verbose", action="store_true", default=argparse.SUPPRESS
    )
    global_options.add_argument("--base-dir", default=argparse.SUPPRESS)
    global_options.add_argument("--config", default=argparse.SUPPRESS)

    parser = argparse.ArgumentParser(
        prog="toolkit",
        description="Productivity toolkit - markdown-backed LLM agents",
        add_help=False,
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    parser.add_argument("--base-dir", default=None)
    parser.add_argument("--config", default=None)

    subparsers = parser.add_subparsers(dest="command")
    common = {"add_help": False, "parents": [global_options]}

    research = subparsers.add_parser("research", **common)
    research.add_argument("topic", nargs="?")
    depth = research.add_mutually_exclusive_group()
    depth.add_argument("--quick", dest="depth", action="store_const", const="quick")
    depth.add_argument("--deep", dest="depth", action="store_const", const="deep")
    research.add_argument("--context", default="")
    research.add_argument("--no-save", dest="save", action="store_false")
    research.set_defaults(depth="standard")

    write = subparsers.add_parser("write", **common)
    write.add_argument("topic", nargs="?")
    write.add_argument("--type", dest="content_type", default="blog")
    write.add_argument("--tone", default="professional")
    write.add_argument("--audience", default="general audience")
    write.add_argument("--length", type=int, default=None)
    write.add_argument("--context", default="")
    write.add_argument("--no-research", dest="use_research", action="store_false")
    write.add_argument("--no-save", dest="save", action="store_false")

    capture = subparsers.add_parser("capture", **common)
    capture.add_argument("text", nargs="?")

    subparsers.add_parser("process", **common)
    subparsers.add_parser("review", **common)

    return parser


def _command_index(argv: Sequence[str]) -> Optional[int]:
    """Position of the first non-option token, skipping global option values."""
    skip_next = False
    for index, token in enumerate(argv):
        if skip_next:
            skip_next = False
            continue
        if token in ("--base-dir", "--config"):
            skip_next = True
            continue
        if token.startswith("-"):
            continue
        return index
    return None


def run_command(args: argparse.Namespace, config: ToolkitConfig) -> int:
    """Dispatch a parsed command. Returns the process exit code."""
    if args.command == "research":
        if not args.topic:
            print(COMMAND_USAGE["research"])
            return 1
        result = ResearchAgent(config).research(
            args.topic, depth=args.depth, save=args.save, context=args.context
        )
        print(f"🔍 Researched {result['topic']!r} with {len(result['sources'])} sources")
        if result["saved_at"]:
            print(f"💾 Saved to {config.path_for('RESEARCH.md')}")
        else:
            print(result["report"])
        return 0

    if args.command == "write":
        if not args.topic:
            print(COMMAND_USAGE["write"])
            return 1
        result = ContentWriter(config).write(
            args.topic,
            type=args.content_type,
            tone=args.tone,
            audience=args.audience,
            length=args.length,
            use_research=args.use_research,
            save=args.save,
            context=args.context,
        )
        if result["saved_at"]:
            print(f"✍️  Wrote {result['type']} about {result['topic']!r}")
            print(f"💾 Saved to {config.path_for('CONTENT.md')}")
        else:
            print(result["output"])
        return 0

    if args.command == "capture":
        if not args.text:
            print(COMMAND_USAGE["capture"])
            return 1
        result = CaptureProcessor(config).capture(args.text)
        print(f"📥 Captured: {result['text']!r}")
        return 0

    if args.command == "process":
        result = CaptureProcessor(config).process()
        if not result["items"]:
            print("✨ Inbox is clear!")
            return 0
        for entry in result["items"]:
            text = entry["item"].text
            if "error" in entry:
                print(f"  ✗ {text[:40]!r} - {entry['error']}")
            else:
                print(f"  ✓ {text[:40]!r} → {entry['category']}")
        print(f"\n✅ Processed {result['processed']}/{len(result['items'])} items")
        return 0

    if args.command == "review":
        result = WeeklyReviewGenerator(config).generate()
        data = result["data"]
        print(f"📊 Projects: {data.projects.active} active, {data.projects.completed} completed")
        print(f"   Tasks: {data.tasks.completed} completed, {data.tasks.pending} pending")
        print(f"   Research: {data.research.topics} topics")
        print(f"   Content: {data.content.pieces} pieces")
        print("✅ Weekly review saved!")
        return 0

    print(USAGE)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entrypoint"""
    argv = list(sys.argv[1:] if argv is None else argv)

    index = _command_index(argv)
    if index is None or argv[index] not in COMMANDS:
        print(USAGE)
        return 0

    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        return int(exc.code or 0)

    load_dotenv()

    try:
        config = load_config(config_path=args.config, base_dir=args.base_dir)
        configure_agent_loggers(
            console_output=True,
            console_level="INFO" if args.verbose else "WARNING",
        )
        logger.debug(f"Config source: {config.source}, base dir: {config.base_dir}")
        return run_command(args, config)
    except KeyboardInterrupt:
        return 130
    except Exception as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
