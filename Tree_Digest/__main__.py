import argparse
import asyncio
import sys
from pathlib import Path

import Tree_Digest.cli.hash_tree as hash_tree_cli
from Tree_Digest.core.algorithms import available_algorithms
from Tree_Digest.core.errors import TreeDigestError
from Tree_Digest.utils.logger import configure_logging, log


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tree-digest",
        description="Hash every file and directory under ROOT.",
    )
    parser.add_argument("root", nargs="?", type=Path, help="file or directory to hash")
    parser.add_argument("-a", "--algorithm", help="digest algorithm (default: sha512)")
    parser.add_argument("-b", "--buffer-size", type=int, help="read buffer in bytes (default: 8192)")
    parser.add_argument("-o", "--output", type=Path, help="write '<path>: <digest>' lines here instead of stdout")
    parser.add_argument(
        "--relative",
        action="store_true",
        default=None,
        help="print paths relative to ROOT's parent",
    )
    parser.add_argument("--settings", type=Path, help="settings.json to load")
    parser.add_argument("--timeout", type=float, help="abort the run after this many seconds")
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING, ERROR")
    parser.add_argument("--list-algorithms", action="store_true", help="print usable algorithms and exit")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list_algorithms:
        for name in available_algorithms():
            print(name)
        return 0

    if args.root is None:
        parser.error("the following arguments are required: root")

    try:
        settings = hash_tree_cli.load_settings(settings_path=args.settings)
        hash_tree_cli.apply_overrides(
            settings,
            algorithm=args.algorithm,
            buffer_size=args.buffer_size,
            output=str(args.output) if args.output else None,
            relative_paths=args.relative,
            log_level=args.log_level,
            timeout=args.timeout,
        )
        configure_logging(settings["logging"]["level"])

        asyncio.run(hash_tree_cli.run(root=args.root, settings=settings))
    except asyncio.TimeoutError:
        # TimeoutError is an OSError on 3.11+, so it is matched first
        print(f"error: timed out after {settings['run']['timeout']}s", file=sys.stderr)
        return 1
    except (TreeDigestError, ValueError, OSError) as exc:
        log("ERROR", "cli", str(exc))
        print(f"error: {exc}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
