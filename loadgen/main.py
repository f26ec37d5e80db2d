"""Command line entry point for loadgen.

Usage:
    loadgen post-lots --count 100 --batch-size 10
    loadgen tick --progress
"""

import argparse
import asyncio
import sys
from typing import List, Optional

from loadgen.config import GARAGE_URL, REVIEW_LAB_URL, PublisherSettings, TickSettings
from loadgen.core.batch import BatchPublisher, PublishResult
from loadgen.core.errors import CommandError, ConfigError
from loadgen.core.logging import configure_logging, logger
from loadgen.core.tick import TickPusher, TickResult
from loadgen.integrations.github import GitDataClient


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="loadgen", description="Generate synthetic load against the GitHub Git data API."
    )
    parser.add_argument("--log-level", default="info", choices=["debug", "info", "warning", "error"])
    parser.add_argument("--log-json", action="store_true", help="emit log events as JSON lines")
    subparsers = parser.add_subparsers(dest="command", required=True)

    post = subparsers.add_parser("post-lots", help="create many blobs, trees and commits")
    post.add_argument("-n", "--count", type=int, default=100, help="number of blobs to create")
    post.add_argument("-b", "--batch-size", type=int, default=10, help="blobs per tree")
    post.add_argument(
        "-c",
        "--concurrency",
        type=int,
        default=16,
        help="max blob requests in flight (0 = unbounded, 1 = sequential)",
    )
    post.add_argument("--owner", help="repository owner")
    post.add_argument("--repo", help="repository name")
    post.add_argument("--api-url", help="API base URL")
    post.add_argument("--timeout", type=float, help="per-request timeout in seconds")

    tick = subparsers.add_parser("tick", help="push a timestamp commit to a branch")
    tick.add_argument("-p", "--progress", action="store_true", help="show push progress")
    tick.add_argument("-v", "--verbose", action="store_true", help="trace git HTTP traffic")
    target = tick.add_mutually_exclusive_group()
    target.add_argument("-r", "--review-lab", action="store_const", dest="url", const=REVIEW_LAB_URL)
    target.add_argument("-g", "--garage", action="store_const", dest="url", const=GARAGE_URL)
    target.add_argument("-u", "--url", dest="url", help="repository URL to push to")
    tick.add_argument("--branch", help="branch to push")
    tick.add_argument("--user", help="user name for basic auth")

    return parser


async def post_lots(settings: PublisherSettings) -> PublishResult:
    async with GitDataClient(settings) as client:
        return await BatchPublisher(client, settings).publish()


async def push_tick(settings: TickSettings) -> TickResult:
    return await TickPusher(settings).push()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level, args.log_json)

    try:
        if args.command == "post-lots":
            settings = PublisherSettings.from_env(
                object_count=args.count,
                batch_size=args.batch_size,
                concurrency=args.concurrency,
                owner=args.owner,
                repo=args.repo,
                api_url=args.api_url,
                timeout=args.timeout,
            )
            print(f"posting {settings.object_count} new objects...")
            result = asyncio.run(post_lots(settings))
            print(result.summary_line())
            return 0

        settings = TickSettings.from_env(
            url=args.url,
            branch=args.branch,
            user=args.user,
            show_progress=args.progress or args.verbose,
            verbose=args.verbose,
        )
        print(f"pushing to {settings.url}")
        tick_result = asyncio.run(push_tick(settings))
        print(f"pushed {tick_result.commit} to {tick_result.branch}")
        return 0

    except ConfigError as e:
        print(e)
        return 1
    except CommandError as e:
        logger.error("command_failed", cmd=e.cmd, returncode=e.returncode, stderr=e.stderr.strip())
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
